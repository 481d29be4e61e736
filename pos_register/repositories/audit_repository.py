# ==============================================================================
# REPOSITORIO DE AUDITORÍA
# ==============================================================================
# Eventos de auditoría en memoria, más recientes al final.
# ==============================================================================

from typing import Any, Dict, List, Optional

from pos_register.models import AuditLog
from pos_register.repositories.base import ListRepository


class AuditRepository(ListRepository[AuditLog]):
    """Log de auditoría con límite de registros."""

    # Límite de registros para no crecer sin control
    MAX_LOGS = 10000

    def log(
        self,
        log_type: str,
        message: str,
        related_id: str = '',
        details: Optional[Dict[str, Any]] = None
    ) -> AuditLog:
        """Registra un evento y descarta los más antiguos sobre MAX_LOGS."""
        entry = AuditLog(
            type=log_type,
            message=message,
            related_id=related_id,
            details=details or {}
        )
        self.append(entry)
        if len(self._records) > self.MAX_LOGS:
            del self._records[:len(self._records) - self.MAX_LOGS]
        return entry

    def get_by_type(self, log_type: str) -> List[AuditLog]:
        return self.find_all_by(lambda entry: entry.type == log_type)
