# ==============================================================================
# OBSERVADORES DE INGRESOS
# ==============================================================================
# Acumulan los ingresos realizados desde que se abrió la caja:
# - TotalRevenueView: observador de pago, muestra el total en el log
# - TotalRevenueFileOutput: observador de finalización, escribe el total
#   en un archivo de texto con fecha y hora
# ==============================================================================

import logging
import os
from datetime import datetime

from pos_register.models import Money, TransactionRecord
from pos_register.services.observers import FinalizationObserver, PaymentObserver

logger = logging.getLogger(__name__)


class TotalRevenueView(PaymentObserver):
    """Muestra los ingresos acumulados después de cada pago."""

    def __init__(self):
        self.total_revenue = Money.zero()

    def on_payment_finalized(self, realized_revenue: Money) -> None:
        self.total_revenue = self.total_revenue.plus(realized_revenue)
        logger.info("Ingresos totales: %s", self.total_revenue)


class TotalRevenueFileOutput(FinalizationObserver):
    """
    Escribe los ingresos acumulados en un archivo por cada venta finalizada.

    Formato de línea: "Ingresos al 2024-01-01 10:00:00: 18.00"
    """

    def __init__(self, file_path: str):
        """
        Args:
            file_path: Ruta del archivo de ingresos (se crea si no existe)
        """
        self.file_path = file_path
        self.total_revenue = Money.zero()

    def on_transaction_finalized(self, record: TransactionRecord) -> None:
        self.total_revenue = self.total_revenue.plus(record.payment.effective_total)
        timestamp = datetime.now().strftime('%Y-%m-%d %H:%M:%S')
        self._write_log(f"Ingresos al {timestamp}: {self.total_revenue}\n")

    def _write_log(self, content: str) -> None:
        directory = os.path.dirname(self.file_path)
        if directory:
            os.makedirs(directory, exist_ok=True)
        with open(self.file_path, 'a', encoding='utf-8') as f:
            f.write(content)
