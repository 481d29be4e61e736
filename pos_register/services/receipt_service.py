# ==============================================================================
# IMPRESORA DE BOLETAS
# ==============================================================================
# Genera el texto de la boleta y lo envía al flujo de salida configurado.
# ==============================================================================

import sys
from typing import List, Optional, TextIO

from pos_register.models import TransactionRecord


class ReceiptPrinter:
    """
    Impresora de boletas en texto plano.

    Attributes:
        stream: Flujo de salida (por defecto sys.stdout)
        printed: Cantidad de boletas impresas
    """

    WIDTH = 40

    def __init__(self, stream: Optional[TextIO] = None):
        self.stream = stream
        self.printed = 0

    def render(self, record: TransactionRecord) -> str:
        """Texto completo de la boleta."""
        payment = record.payment
        rule = '-' * self.WIDTH
        lines: List[str] = [
            f"BOLETA {record.receipt}".center(self.WIDTH),
            record.ts.center(self.WIDTH),
            rule,
        ]
        if record.customer_id:
            lines.append(self._row('Cliente', record.customer_id))

        for item, quantity in record.lines:
            line_total = item.unit_price.multiplied_by(quantity)
            lines.append(item.name)
            lines.append(self._row(f"  {quantity} x {item.unit_price}", str(line_total)))

        lines.append(rule)
        lines.append(self._row('Total', str(payment.total_price)))
        lines.append(self._row('IVA', str(payment.total_vat)))
        if payment.has_discount:
            lines.append(self._row('Descuento', f"-{payment.discount}"))
            lines.append(self._row('Total con descuento', str(payment.total_price_after_discount)))
            lines.append(self._row('IVA con descuento', str(payment.total_vat_after_discount)))
        lines.append(self._row('Pagado', str(payment.amount_paid)))
        lines.append(self._row('Vuelto', str(payment.change)))
        lines.append(rule)
        return '\n'.join(lines)

    def print_receipt(self, record: TransactionRecord) -> None:
        print(self.render(record), file=self.stream or sys.stdout)
        self.printed += 1

    def _row(self, label: str, value: str) -> str:
        padding = max(1, self.WIDTH - len(label) - len(value))
        return f"{label}{' ' * padding}{value}"
