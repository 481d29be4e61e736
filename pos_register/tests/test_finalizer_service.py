import logging

import pytest

from pos_register.models import (
    CollaboratorUnavailable,
    FinalizationError,
    Money,
    PaymentRecord,
    TransactionRecord,
    UnknownCustomer,
    UnknownItem,
)
from pos_register.repositories import (
    AccountingRepository,
    CashRegister,
    CustomerRepository,
    InventoryRepository,
    SalesRepository,
)
from pos_register.services import ReceiptPrinter, TransactionFinalizer

from conftest import RecordingFinalizationObserver


class SpyInventory(InventoryRepository):
    def __init__(self, calls, fail=False):
        super().__init__()
        self.calls = calls
        self.fail = fail

    def apply_basket_to_stock(self, basket):
        self.calls.append('inventario')
        if self.fail:
            raise ConnectionError('inventario fuera de línea')
        super().apply_basket_to_stock(basket)


class SpyAccounting(AccountingRepository):
    def __init__(self, calls, fail=False):
        super().__init__()
        self.calls = calls
        self.fail = fail

    def record_payment(self, record):
        self.calls.append('contabilidad')
        if self.fail:
            raise ConnectionError('contabilidad fuera de línea')
        super().record_payment(record)


class SpyCashRegister(CashRegister):
    def __init__(self, calls):
        super().__init__(Money(5000))
        self.calls = calls

    def record_cash_movement(self, amount_paid, change):
        self.calls.append('caja')
        super().record_cash_movement(amount_paid, change)


class SpyPrinter(ReceiptPrinter):
    def __init__(self, calls):
        super().__init__()
        self.calls = calls

    def print_receipt(self, record):
        self.calls.append('impresora')
        self.printed += 1


class SpySaleLog(SalesRepository):
    """Registro de ventas que guarda una copia, no el objeto recibido."""

    def __init__(self, calls):
        super().__init__()
        self.calls = calls

    def append(self, record):
        self.calls.append('registro de ventas')
        super().append(TransactionRecord(
            receipt=record.receipt,
            lines=record.lines,
            payment=record.payment,
            ts=record.ts,
            customer_id=record.customer_id,
        ))

    def last_appended(self):
        self.calls.append('leer registro')
        return super().last_appended()


@pytest.fixture
def calls():
    return []


@pytest.fixture
def finalizer(calls, item_a):
    inventory = SpyInventory(calls)
    inventory.add_item(item_a, stock=10)
    return TransactionFinalizer(
        inventory=inventory,
        accounting=SpyAccounting(calls),
        cash_register=SpyCashRegister(calls),
        receipt_printer=SpyPrinter(calls),
        sale_log=SpySaleLog(calls),
    )


@pytest.fixture
def record(item_a):
    payment = PaymentRecord(
        total_price=Money(2000),
        total_vat=Money(120),
        amount_paid=Money(2500),
        change=Money(500),
    )
    return TransactionRecord(receipt='R0001', lines=((item_a, 2),), payment=payment)


def test_finalization_steps_run_in_order(finalizer, record, calls):
    observer = RecordingFinalizationObserver(calls, 'observador')
    finalizer.add_observer(observer)

    finalizer.register_transaction(record)

    assert calls == [
        'caja',
        'impresora',
        'inventario',
        'contabilidad',
        'registro de ventas',
        'leer registro',
        'observador',
    ]


def test_finalization_updates_collaborators(finalizer, record):
    finalizer.register_transaction(record)

    assert finalizer.cash_register.balance == Money(7000)
    assert finalizer.cash_register.movements == [(Money(2500), Money(500))]
    assert finalizer.receipt_printer.printed == 1
    assert finalizer.inventory.get_stock('A') == 8
    assert len(finalizer.accounting) == 1
    assert finalizer.sale_log.get_by_receipt('R0001') == record


def test_observers_receive_the_logged_record(finalizer, record, recording_finalization_observer):
    finalizer.add_observer(recording_finalization_observer)

    logged = finalizer.register_transaction(record)

    assert logged is finalizer.sale_log.last_appended()
    assert logged is not record
    assert recording_finalization_observer.records[0] is logged


def test_duplicate_observer_is_notified_once(finalizer, record, recording_finalization_observer):
    finalizer.add_observers([recording_finalization_observer, recording_finalization_observer])
    finalizer.add_observer(recording_finalization_observer)

    finalizer.register_transaction(record)

    assert len(recording_finalization_observer.records) == 1


def test_failing_observer_is_isolated(finalizer, record, failing_observer, recording_finalization_observer, caplog):
    finalizer.add_observers([failing_observer, recording_finalization_observer])

    with caplog.at_level(logging.ERROR):
        logged = finalizer.register_transaction(record)

    assert recording_finalization_observer.records == [logged]
    assert 'venta finalizada' in caplog.text


def test_failed_step_is_reported_and_stops_finalization(calls, item_a, record, recording_finalization_observer):
    finalizer = TransactionFinalizer(
        inventory=SpyInventory(calls),
        accounting=SpyAccounting(calls, fail=True),
        cash_register=SpyCashRegister(calls),
        receipt_printer=SpyPrinter(calls),
        sale_log=SpySaleLog(calls),
    )
    finalizer.add_observer(recording_finalization_observer)

    with pytest.raises(FinalizationError) as excinfo:
        finalizer.register_transaction(record)

    assert excinfo.value.context['step'] == 'contabilidad'
    assert excinfo.value.context['receipt'] == 'R0001'
    assert isinstance(excinfo.value.__cause__, ConnectionError)
    assert calls == ['caja', 'impresora', 'inventario', 'contabilidad']
    assert len(finalizer.sale_log) == 0
    assert recording_finalization_observer.records == []


def test_fetch_item(finalizer, item_a):
    assert finalizer.fetch_item('A') == item_a
    with pytest.raises(UnknownItem):
        finalizer.fetch_item('NO-EXISTE')

    finalizer.inventory.available = False
    with pytest.raises(CollaboratorUnavailable):
        finalizer.fetch_item('A')


def test_fetch_customer_and_discounts_without_registries(finalizer):
    with pytest.raises(CollaboratorUnavailable):
        finalizer.fetch_customer('123')
    rules = finalizer.fetch_discounts('123')
    assert len(rules) == 0
    assert rules.customer_id == '123'


def test_fetch_customer_unknown(finalizer):
    finalizer.customer_registry = CustomerRepository()
    with pytest.raises(UnknownCustomer):
        finalizer.fetch_customer('123')


def test_next_receipt_number_follows_the_sale_log(finalizer, record):
    assert finalizer.next_receipt_number() == 'R0001'
    finalizer.register_transaction(record)
    assert finalizer.next_receipt_number() == 'R0002'


def test_inventory_failure_does_not_lose_the_sale(calls, record, recording_finalization_observer, caplog):
    finalizer = TransactionFinalizer(
        inventory=SpyInventory(calls, fail=True),
        accounting=SpyAccounting(calls),
        cash_register=SpyCashRegister(calls),
        receipt_printer=SpyPrinter(calls),
        sale_log=SpySaleLog(calls),
    )
    finalizer.add_observer(recording_finalization_observer)

    with caplog.at_level(logging.ERROR):
        logged = finalizer.register_transaction(record)

    assert calls == [
        'caja',
        'impresora',
        'inventario',
        'contabilidad',
        'registro de ventas',
        'leer registro',
    ]
    assert len(finalizer.accounting) == 1
    assert len(finalizer.sale_log) == 1
    assert recording_finalization_observer.records == [logged]
    assert 'R0001' in caplog.text
