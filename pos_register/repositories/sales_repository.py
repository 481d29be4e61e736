# ==============================================================================
# REGISTRO DE VENTAS
# ==============================================================================
# Fuente de verdad de las ventas finalizadas.
# Solo agregar, en orden de inserción: [R0001, R0002, ...]
# ==============================================================================

from typing import Optional

from pos_register.models import Money, TransactionRecord
from pos_register.repositories.base import ListRepository


class SalesRepository(ListRepository[TransactionRecord]):
    """
    Registro de ventas (sale log).

    El registro es dueño de cada TransactionRecord después de agregarlo.
    """

    def last_appended(self) -> TransactionRecord:
        """
        Último registro agregado.

        Raises:
            LookupError: Si el registro está vacío
        """
        if not self._records:
            raise LookupError('El registro de ventas está vacío')
        return self._records[-1]

    def get_by_receipt(self, receipt: str) -> Optional[TransactionRecord]:
        """
        Busca una venta por número de boleta.

        Args:
            receipt: Número de boleta (ej: "R0001")
        """
        return self.find_by(lambda record: record.receipt == receipt)

    def next_receipt_number(self) -> str:
        """
        Genera el siguiente número de boleta.
        Formato: RXXXX donde XXXX es número secuencial.
        """
        max_num = 0
        for record in self._records:
            if record.receipt.startswith('R'):
                try:
                    max_num = max(max_num, int(record.receipt[1:]))
                except ValueError:
                    continue
        return f"R{max_num + 1:04d}"

    def total_revenue(self) -> Money:
        """Suma del total efectivo de todas las ventas registradas."""
        total = Money.zero()
        for record in self._records:
            total = total.plus(record.payment.effective_total)
        return total
