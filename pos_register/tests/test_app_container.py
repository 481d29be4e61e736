import pytest

from pos_register import config
from pos_register.app_container import AppContainer
from pos_register.models import Money


def test_env_int_rejects_non_integers(monkeypatch):
    monkeypatch.setenv('POS_TEST_INT', 'diez')
    with pytest.raises(ValueError):
        config._env_int('POS_TEST_INT', 1)

    monkeypatch.setenv('POS_TEST_INT', '')
    assert config._env_int('POS_TEST_INT', 7) == 7


@pytest.mark.parametrize('value, expected', [('1', True), ('true', True), ('no', False)])
def test_env_flag(monkeypatch, value, expected):
    monkeypatch.setenv('POS_TEST_FLAG', value)
    assert config._env_flag('POS_TEST_FLAG') is expected


def test_container_reuses_instances(container):
    assert container.sale_service is container.sale_service
    assert container.finalizer.cash_register is container.cash_register
    assert container.cash_register.balance == Money(5000)


def test_settings_override_environment(tmp_path):
    c = AppContainer({
        'INITIAL_CASH_BALANCE': 123,
        'REVENUE_LOG_PATH': str(tmp_path / 'r.txt'),
    })
    assert c.cash_register.initial_balance == Money(123)
    assert c.revenue_file_output.file_path == str(tmp_path / 'r.txt')


def test_reset_opens_a_fresh_register(container):
    first = container.sales_repo
    container.reset()
    assert container.sales_repo is not first
    assert len(container.inventory_repo) == 0


def test_seed_demo_data(tmp_path):
    c = AppContainer({'REVENUE_LOG_PATH': str(tmp_path / 'r.txt')})
    c.seed_demo_data()
    assert c.inventory_repo.get_item('abc123').unit_price == Money(1000)
    assert len(c.discount_repo.get_rules('19900101')) == 3
    assert len(c.discount_repo.get_rules()) == 2


def test_in_memory_collaborators_satisfy_interfaces(container):
    from pos_register.repositories import (
        IAccountingSystem,
        ICashRegister,
        ICustomerRegistry,
        IDiscountRuleSource,
        IInventorySystem,
        IReceiptPrinter,
        ISaleLog,
    )

    assert isinstance(container.inventory_repo, IInventorySystem)
    assert isinstance(container.accounting_repo, IAccountingSystem)
    assert isinstance(container.cash_register, ICashRegister)
    assert isinstance(container.receipt_printer, IReceiptPrinter)
    assert isinstance(container.sales_repo, ISaleLog)
    assert isinstance(container.discount_repo, IDiscountRuleSource)
    assert isinstance(container.customer_repo, ICustomerRegistry)
