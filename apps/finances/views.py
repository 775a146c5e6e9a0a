import logging

from django.http import JsonResponse

from apps.accounts.decorators import admin_required
from apps.core.decorators import api_view
from apps.core.exceptions import NotFoundError
from apps.core.utils import month_bounds, parse_json_body, validate_form
from .forms import ExpenseForm, FinancialSettingsForm, FixedExpenseForm, IncomeForm, SalaryForm
from .models import Expense, FinancialSettings, FixedExpense, Income, Salary

logger = logging.getLogger(__name__)


def get_active_or_404(model, pk, message):
    try:
        return model.objects.active().get(pk=pk)
    except model.DoesNotExist:
        raise NotFoundError(message)


def apply_changes(instance, form):
    """Copy the submitted fields of a partial form onto ``instance`` and save"""
    changes = form.submitted_data
    for field, value in changes.items():
        setattr(instance, field, value)
    instance.save()
    instance.refresh_from_db()
    return changes


# SALARIES

@api_view('GET', 'POST')
@admin_required
def salary_list_view(request):
    if request.method == 'POST':
        form = SalaryForm(parse_json_body(request))
        salary = Salary.objects.create(**validate_form(form))
        salary.refresh_from_db()
        logger.info(f"Salary created: {salary.id} for {salary.person_name}")
        return JsonResponse({'salary': salary.to_dict()}, status=201)

    salaries = Salary.objects.active().order_by('-date')

    month = request.GET.get('month', '').strip()
    if month:
        start, end = month_bounds(month)
        salaries = salaries.filter(date__gte=start, date__lte=end)

    return JsonResponse({'salaries': [salary.to_dict() for salary in salaries]})


@api_view('GET', 'PUT', 'DELETE')
@admin_required
def salary_detail_view(request, pk):
    salary = get_active_or_404(Salary, pk, 'Salary not found')

    if request.method == 'PUT':
        form = SalaryForm(parse_json_body(request), partial=True)
        validate_form(form)
        apply_changes(salary, form)
        return JsonResponse({'salary': salary.to_dict()})

    if request.method == 'DELETE':
        salary.soft_delete()
        logger.info(f"Salary soft-deleted: {salary.id}")
        return JsonResponse({'message': 'Salary deleted'})

    return JsonResponse({'salary': salary.to_dict()})


# FIXED EXPENSES

@api_view('GET', 'POST')
@admin_required
def fixed_expense_list_view(request):
    if request.method == 'POST':
        form = FixedExpenseForm(parse_json_body(request))
        expense = FixedExpense.objects.create(**validate_form(form))
        expense.refresh_from_db()
        logger.info(f"Fixed expense created: {expense.id} - {expense.name}")
        return JsonResponse({'expense': expense.to_dict()}, status=201)

    expenses = FixedExpense.objects.active().order_by('name')
    return JsonResponse({'expenses': [expense.to_dict() for expense in expenses]})


@api_view('GET', 'PUT', 'DELETE')
@admin_required
def fixed_expense_detail_view(request, pk):
    expense = get_active_or_404(FixedExpense, pk, 'Fixed expense not found')

    if request.method == 'PUT':
        form = FixedExpenseForm(parse_json_body(request), partial=True)
        validate_form(form)
        apply_changes(expense, form)
        return JsonResponse({'expense': expense.to_dict()})

    if request.method == 'DELETE':
        expense.soft_delete()
        logger.info(f"Fixed expense soft-deleted: {expense.id}")
        return JsonResponse({'message': 'Fixed expense deleted'})

    return JsonResponse({'expense': expense.to_dict()})


# EXPENSES

@api_view('GET', 'POST')
@admin_required
def expense_list_view(request):
    if request.method == 'POST':
        form = ExpenseForm(parse_json_body(request))
        expense = Expense.objects.create(**validate_form(form))
        expense.refresh_from_db()
        logger.info(f"Expense created: {expense.id} - {expense.name}")
        return JsonResponse({'expense': expense.to_dict()}, status=201)

    expenses = Expense.objects.active().order_by('-date_start')

    month = request.GET.get('month', '').strip()
    if month:
        # Any expense whose period overlaps the month
        start, end = month_bounds(month)
        expenses = expenses.filter(date_start__lte=end, date_end__gte=start)

    return JsonResponse({'expenses': [expense.to_dict() for expense in expenses]})


@api_view('GET', 'PUT', 'DELETE')
@admin_required
def expense_detail_view(request, pk):
    expense = get_active_or_404(Expense, pk, 'Expense not found')

    if request.method == 'PUT':
        form = ExpenseForm(parse_json_body(request), partial=True, instance=expense)
        validate_form(form)
        apply_changes(expense, form)
        return JsonResponse({'expense': expense.to_dict()})

    if request.method == 'DELETE':
        expense.soft_delete()
        logger.info(f"Expense soft-deleted: {expense.id}")
        return JsonResponse({'message': 'Expense deleted'})

    return JsonResponse({'expense': expense.to_dict()})


# INCOMES

@api_view('GET', 'POST')
@admin_required
def income_list_view(request):
    if request.method == 'POST':
        form = IncomeForm(parse_json_body(request))
        income = Income.objects.create(**validate_form(form))
        income.refresh_from_db()
        logger.info(f"Income created: {income.id} from {income.client_name}")
        return JsonResponse({'income': income.to_dict()}, status=201)

    incomes = Income.objects.active().order_by('-date')

    month = request.GET.get('month', '').strip()
    if month:
        start, end = month_bounds(month)
        incomes = incomes.filter(date__gte=start, date__lte=end)

    status = request.GET.get('status', '').strip()
    if status and status != 'all':
        incomes = incomes.filter(status=status)

    return JsonResponse({'incomes': [income.to_dict() for income in incomes]})


@api_view('GET', 'PUT', 'DELETE')
@admin_required
def income_detail_view(request, pk):
    income = get_active_or_404(Income, pk, 'Income not found')

    if request.method == 'PUT':
        form = IncomeForm(parse_json_body(request), partial=True)
        validate_form(form)
        apply_changes(income, form)
        return JsonResponse({'income': income.to_dict()})

    if request.method == 'DELETE':
        income.soft_delete()
        logger.info(f"Income soft-deleted: {income.id}")
        return JsonResponse({'message': 'Income deleted'})

    return JsonResponse({'income': income.to_dict()})


# SETTINGS

@api_view('GET', 'PUT')
@admin_required
def settings_view(request):
    if request.method == 'PUT':
        data = validate_form(FinancialSettingsForm(parse_json_body(request)))
        financial_settings = FinancialSettings.store(data['corporate_tax_percent'])
        logger.info(f"Corporate tax set to {data['corporate_tax_percent']}%")
    else:
        financial_settings = FinancialSettings.load()

    return JsonResponse({'settings': financial_settings.to_dict()})
