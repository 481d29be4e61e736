# ==============================================================================
# POLÍTICA DE DESCUENTOS
# ==============================================================================
# Calcula el descuento de una venta a partir de una instantánea de reglas.
# Funciones puras y deterministas: sin efectos secundarios.
#
# REGLAS DE NEGOCIO:
# 1. Las reglas NO se acumulan: se aplica solo la que da el mayor descuento
# 2. Empate → gana la regla declarada primero
# 3. El descuento nunca supera el total (el total final nunca es negativo)
# 4. El IVA se escala proporcionalmente al total con descuento
# ==============================================================================

from typing import Optional, Tuple

from pos_register.models import (
    Basket,
    DiscountRule,
    DiscountRuleSet,
    DiscountType,
    Money,
)


class DiscountPolicy:
    """Política de descuento: mayor descuento único, sin acumular."""

    def compute_discount(
        self,
        rules: Optional[DiscountRuleSet],
        basket: Basket,
        pre_discount_total: Money
    ) -> Money:
        """
        Calcula el descuento para la canasta.

        Args:
            rules: Reglas vigentes (None = no se pidió descuento)
            basket: Canasta de la venta
            pre_discount_total: Total antes de descuento

        Returns:
            Monto a descontar (cero si ninguna regla es elegible)
        """
        selected = self.select_rule(rules, basket, pre_discount_total)
        if selected is None:
            return Money.zero()
        _, amount = selected
        return min(amount, pre_discount_total)

    def select_rule(
        self,
        rules: Optional[DiscountRuleSet],
        basket: Basket,
        pre_discount_total: Money
    ) -> Optional[Tuple[DiscountRule, Money]]:
        """
        Regla elegible con el mayor descuento (empate: la declarada primero).

        Returns:
            Tupla (regla, monto sin limitar) o None si ninguna aplica
        """
        if not rules:
            return None

        best = None
        for rule in rules.rules:
            amount = self.rule_discount(rule, rules.customer_id, basket, pre_discount_total)
            if amount <= Money.zero():
                continue
            if best is None or amount > best[1]:
                best = (rule, amount)
        return best

    def rule_discount(
        self,
        rule: DiscountRule,
        customer_id: Optional[str],
        basket: Basket,
        pre_discount_total: Money
    ) -> Money:
        """Descuento que otorga una regla, o cero si no es elegible."""
        if rule.customer_id is not None and rule.customer_id != customer_id:
            return Money.zero()

        if rule.discount_type == DiscountType.ITEM:
            quantity = basket.quantity_of(rule.item_id)
            if quantity < max(rule.min_quantity, 1):
                return Money.zero()
            for item, qty in basket.items():
                if item.item_id == rule.item_id:
                    return item.unit_price.multiplied_by(qty).multiplied_by(rule.rate)
            return Money.zero()

        if rule.discount_type == DiscountType.TOTAL_THRESHOLD:
            threshold = rule.threshold or Money.zero()
            if pre_discount_total < threshold:
                return Money.zero()
            return pre_discount_total.multiplied_by(rule.rate)

        if rule.discount_type == DiscountType.CUSTOMER:
            # Descuento de fidelidad: requiere un cliente identificado
            if customer_id is None:
                return Money.zero()
            return pre_discount_total.multiplied_by(rule.rate)

        return Money.zero()

    def compute_total_after_discount(
        self,
        pre_discount_total: Money,
        discount: Money
    ) -> Money:
        """Total con descuento; el descuento se limita al total."""
        return pre_discount_total.minus(min(discount, pre_discount_total))

    def compute_vat_after_discount(
        self,
        total_after_discount: Money,
        pre_discount_total: Money,
        pre_discount_vat: Money
    ) -> Money:
        """IVA escalado a la proporción total_con_descuento / total_original."""
        if pre_discount_total.is_zero():
            return Money.zero()
        return pre_discount_vat.multiplied_by(
            total_after_discount.ratio_to(pre_discount_total)
        )
