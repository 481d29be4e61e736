# ==============================================================================
# REPOSITORIO DE DESCUENTOS
# ==============================================================================
# Base de datos de reglas de descuento. Entrega una instantánea inmutable
# de las reglas aplicables a un cliente.
# ==============================================================================

from typing import Iterable, List, Optional

from pos_register.models import DiscountRule, DiscountRuleSet


class DiscountRepository:
    """
    Fuente de reglas de descuento.

    Las reglas se devuelven en orden de declaración; ese orden desempata
    cuando dos reglas dan el mismo descuento.
    """

    def __init__(self, rules: Optional[Iterable[DiscountRule]] = None):
        self._rules: List[DiscountRule] = list(rules or [])

    def add_rule(self, rule: DiscountRule) -> None:
        self._rules.append(rule)

    def get_rules(self, customer_id: Optional[str] = None) -> DiscountRuleSet:
        """
        Obtiene las reglas generales y las del cliente indicado.

        Args:
            customer_id: Cliente identificado (opcional)

        Returns:
            Instantánea de reglas para esta transacción
        """
        rules = tuple(
            rule for rule in self._rules
            if rule.customer_id is None or rule.customer_id == customer_id
        )
        return DiscountRuleSet(rules=rules, customer_id=customer_id)
