# ==============================================================================
# REPOSITORIO BASE - Funcionalidad común para almacenes en memoria
# ==============================================================================
# Los colaboradores externos (inventario, contabilidad, registro de ventas,
# auditoría) se modelan como repositorios en memoria. El formato de
# persistencia real es responsabilidad de cada sistema externo.
# ==============================================================================

from typing import Callable, Dict, Generic, List, Optional, TypeVar

T = TypeVar('T')


class DictRepository(Generic[T]):
    """
    Repositorio base para registros indexados por ID.

    Ejemplo: catálogo -> {"ITEM-1": Item(...), ...}
    """

    def __init__(self, records: Optional[Dict[str, T]] = None):
        self._records: Dict[str, T] = dict(records or {})

    def get_by_id(self, record_id: str) -> Optional[T]:
        return self._records.get(record_id)

    def update(self, record_id: str, record: T) -> None:
        """Crea o reemplaza un registro."""
        self._records[record_id] = record

    def __len__(self) -> int:
        return len(self._records)


class ListRepository(Generic[T]):
    """
    Repositorio base para registros en orden de inserción (solo agregar).

    Ejemplo: registro de ventas -> [TransactionRecord, ...]
    """

    def __init__(self):
        self._records: List[T] = []

    def get_all(self) -> List[T]:
        """Copia de todos los registros, en orden de inserción."""
        return list(self._records)

    def append(self, record: T) -> None:
        """Agrega un registro al final."""
        self._records.append(record)

    def find_by(self, predicate: Callable[[T], bool]) -> Optional[T]:
        """Primer registro que cumple el predicado o None."""
        for record in self._records:
            if predicate(record):
                return record
        return None

    def find_all_by(self, predicate: Callable[[T], bool]) -> List[T]:
        return [r for r in self._records if predicate(r)]

    def __len__(self) -> int:
        return len(self._records)
