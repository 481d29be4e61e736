# ==============================================================================
# CONFIGURACIÓN
# ==============================================================================
# Valores leídos de variables de entorno al importar el módulo.
# Comando: export POS_INITIAL_CASH=10000
# ==============================================================================

import logging
import os
from typing import Any, Dict

from pos_register.models import MINOR_UNITS_PER_MAJOR

BASE = os.path.dirname(os.path.abspath(__file__))


def _env_flag(name: str, default: bool = False) -> bool:
    value = os.environ.get(name)
    if value is None:
        return default
    return value.strip().lower() in ('1', 'true', 'yes', 'on')


def _env_int(name: str, default: int) -> int:
    value = os.environ.get(name)
    if value is None or value.strip() == '':
        return default
    try:
        return int(value)
    except ValueError:
        raise ValueError(f"{name} debe ser un entero, no {value!r}") from None


# ═══════════════════════════════════════════════════════════════════════════════
# MODO PRODUCCIÓN
# ═══════════════════════════════════════════════════════════════════════════════
# True = Caja limpia, sin catálogo de demostración
# False = Modo desarrollo con catálogo y descuentos de ejemplo
PRODUCTION_MODE = _env_flag('POS_PRODUCTION_MODE')

# Saldo del cajón al abrir caja (unidades menores)
INITIAL_CASH_BALANCE = _env_int('POS_INITIAL_CASH', 5000)

# Archivo de ingresos acumulados
REVENUE_LOG_PATH = os.environ.get(
    'POS_REVENUE_LOG', os.path.join(BASE, 'logs', 'total_revenue.txt')
)

LOG_LEVEL = os.environ.get('POS_LOG_LEVEL', 'INFO').upper()

LOG_FORMAT = '[%(asctime)s] %(levelname)s %(name)s: %(message)s'


def load_config() -> Dict[str, Any]:
    """Configuración completa como diccionario (para app.config)."""
    return {
        'PRODUCTION_MODE': PRODUCTION_MODE,
        'INITIAL_CASH_BALANCE': INITIAL_CASH_BALANCE,
        'REVENUE_LOG_PATH': REVENUE_LOG_PATH,
        'LOG_LEVEL': LOG_LEVEL,
        'MINOR_UNITS_PER_MAJOR': MINOR_UNITS_PER_MAJOR,
    }


def configure_logging(level: str = LOG_LEVEL) -> None:
    """Configura el logging raíz una sola vez."""
    logging.basicConfig(level=level, format=LOG_FORMAT)
    logging.getLogger('pos_register').setLevel(level)
