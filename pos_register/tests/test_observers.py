import io
import re

import pytest

from pos_register.models import AuditType, Money, PaymentRecord, TransactionRecord
from pos_register.repositories import AuditRepository
from pos_register.services import (
    AuditService,
    ReceiptPrinter,
    TotalRevenueFileOutput,
    TotalRevenueView,
)


@pytest.fixture
def discounted_record(item_a):
    payment = PaymentRecord(
        total_price=Money(2000),
        total_vat=Money(120),
        amount_paid=Money(2000),
        change=Money(200),
        discount=Money(200),
        total_price_after_discount=Money(1800),
        total_vat_after_discount=Money(108),
    )
    return TransactionRecord(
        receipt='R0001', lines=((item_a, 2),), payment=payment, customer_id='C1'
    )


@pytest.fixture
def plain_record(item_b):
    payment = PaymentRecord(
        total_price=Money(250),
        total_vat=Money(30),
        amount_paid=Money(300),
        change=Money(50),
    )
    return TransactionRecord(receipt='R0002', lines=((item_b, 1),), payment=payment)


def test_revenue_view_accumulates():
    view = TotalRevenueView()
    view.on_payment_finalized(Money(1800))
    view.on_payment_finalized(Money(250))
    assert view.total_revenue == Money(2050)


def test_revenue_file_output_appends_lines(tmp_path, discounted_record, plain_record):
    path = tmp_path / 'logs' / 'ingresos.txt'
    output = TotalRevenueFileOutput(str(path))

    output.on_transaction_finalized(discounted_record)
    output.on_transaction_finalized(plain_record)

    lines = path.read_text(encoding='utf-8').splitlines()
    assert len(lines) == 2
    assert re.fullmatch(r'Ingresos al \d{4}-\d{2}-\d{2} \d{2}:\d{2}:\d{2}: 18\.00', lines[0])
    assert lines[1].endswith(': 20.50')


def test_audit_service_logs_payments_and_sales(discounted_record):
    audit = AuditService(AuditRepository())

    audit.on_payment_finalized(Money(1800))
    audit.on_transaction_finalized(discounted_record)

    pagos = audit.get_logs(AuditType.PAGO.value)
    ventas = audit.get_logs(AuditType.VENTA.value)
    assert [log.message for log in pagos] == ['Pago recibido: 18.00']
    assert ventas[0].related_id == 'R0001'
    assert ventas[0].message == (
        'Venta R0001 finalizada - Total: 18.00 - 2 artículos - Descuento: 2.00'
    )
    assert ventas[0].details['customer_id'] == 'C1'
    assert len(audit.get_logs()) == 2


def test_audit_repository_is_bounded():
    repo = AuditRepository()
    repo.MAX_LOGS = 3
    for i in range(5):
        repo.log(AuditType.SISTEMA.value, f'evento {i}')
    assert [entry.message for entry in repo.get_all()] == ['evento 2', 'evento 3', 'evento 4']


def test_receipt_shows_discount_only_when_applied(discounted_record, plain_record):
    printer = ReceiptPrinter()

    with_discount = printer.render(discounted_record)
    assert 'BOLETA R0001' in with_discount
    assert 'Cliente' in with_discount
    assert '2 x 10.00' in with_discount
    assert 'Descuento' in with_discount
    assert with_discount.splitlines()[-2].endswith('2.00')

    without_discount = printer.render(plain_record)
    assert 'Descuento' not in without_discount
    assert 'Cliente' not in without_discount


def test_print_receipt_writes_to_stream(plain_record):
    stream = io.StringIO()
    printer = ReceiptPrinter(stream)
    printer.print_receipt(plain_record)
    assert printer.printed == 1
    assert 'BOLETA R0002' in stream.getvalue()
