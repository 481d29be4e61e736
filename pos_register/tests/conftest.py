import io

import pytest

from pos_register.app_container import AppContainer
from pos_register.models import (
    Basket,
    DiscountRule,
    DiscountRuleSet,
    DiscountType,
    Item,
    Money,
)
from pos_register.services import FinalizationObserver, PaymentObserver


class RecordingPaymentObserver(PaymentObserver):
    def __init__(self, calls=None, name='pago'):
        self.revenues = []
        self.calls = calls
        self.name = name

    def on_payment_finalized(self, realized_revenue):
        self.revenues.append(realized_revenue)
        if self.calls is not None:
            self.calls.append(self.name)


class RecordingFinalizationObserver(FinalizationObserver):
    def __init__(self, calls=None, name='observador'):
        self.records = []
        self.calls = calls
        self.name = name

    def on_transaction_finalized(self, record):
        self.records.append(record)
        if self.calls is not None:
            self.calls.append(self.name)


class FailingObserver(PaymentObserver, FinalizationObserver):
    def on_payment_finalized(self, realized_revenue):
        raise RuntimeError('observador de pago roto')

    def on_transaction_finalized(self, record):
        raise RuntimeError('observador de finalización roto')


@pytest.fixture
def item_a():
    return Item('A', 'Ítem A', Money(1000), '0.06')


@pytest.fixture
def item_b():
    return Item('B', 'Ítem B', Money(250), '0.12')


@pytest.fixture
def basket_a(item_a):
    basket = Basket()
    basket.add(item_a, 2)
    return basket


@pytest.fixture
def ten_percent_rules():
    rule = DiscountRule('TOTAL-10', DiscountType.TOTAL_THRESHOLD, '0.10', threshold=Money(0))
    return DiscountRuleSet(rules=(rule,))


@pytest.fixture
def recording_payment_observer():
    return RecordingPaymentObserver()


@pytest.fixture
def recording_finalization_observer():
    return RecordingFinalizationObserver()


@pytest.fixture
def failing_observer():
    return FailingObserver()


@pytest.fixture
def container(tmp_path, item_a, item_b):
    c = AppContainer({
        'INITIAL_CASH_BALANCE': 5000,
        'REVENUE_LOG_PATH': str(tmp_path / 'logs' / 'total_revenue.txt'),
    })
    c.inventory_repo.add_item(item_a, stock=10)
    c.inventory_repo.add_item(item_b, stock=10)
    c.receipt_printer.stream = io.StringIO()
    return c
