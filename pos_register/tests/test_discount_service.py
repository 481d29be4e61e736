import pytest

from pos_register.models import (
    Basket,
    DiscountRule,
    DiscountRuleSet,
    DiscountType,
    Money,
)
from pos_register.services import DiscountPolicy


@pytest.fixture
def policy():
    return DiscountPolicy()


def test_no_rules_gives_zero_discount(policy, basket_a):
    assert policy.compute_discount(None, basket_a, Money(2000)) == Money(0)
    assert policy.compute_discount(DiscountRuleSet(), basket_a, Money(2000)) == Money(0)


def test_ten_percent_off_total(policy, basket_a, ten_percent_rules):
    discount = policy.compute_discount(ten_percent_rules, basket_a, Money(2000))
    assert discount == Money(200)
    after = policy.compute_total_after_discount(Money(2000), discount)
    assert after == Money(1800)
    assert policy.compute_vat_after_discount(after, Money(2000), Money(120)) == Money(108)


def test_largest_single_discount_wins_without_stacking(policy, basket_a):
    rules = DiscountRuleSet(rules=(
        DiscountRule('T5', DiscountType.TOTAL_THRESHOLD, '0.05', threshold=Money(0)),
        DiscountRule('ITEM-A', DiscountType.ITEM, '0.25', item_id='A'),
        DiscountRule('T10', DiscountType.TOTAL_THRESHOLD, '0.10', threshold=Money(0)),
    ))
    rule, amount = policy.select_rule(rules, basket_a, Money(2000))
    assert rule.rule_id == 'ITEM-A'
    assert amount == Money(500)
    assert policy.compute_discount(rules, basket_a, Money(2000)) == Money(500)


def test_ties_go_to_first_declared_rule(policy, basket_a):
    rules = DiscountRuleSet(rules=(
        DiscountRule('FIRST', DiscountType.TOTAL_THRESHOLD, '0.10', threshold=Money(0)),
        DiscountRule('SECOND', DiscountType.ITEM, '0.10', item_id='A'),
    ))
    rule, _ = policy.select_rule(rules, basket_a, Money(2000))
    assert rule.rule_id == 'FIRST'


def test_threshold_rule_requires_minimum_total(policy, basket_a):
    rules = DiscountRuleSet(rules=(
        DiscountRule('T', DiscountType.TOTAL_THRESHOLD, '0.10', threshold=Money(2001)),
    ))
    assert policy.compute_discount(rules, basket_a, Money(2000)) == Money(0)


def test_item_rule_requires_item_and_min_quantity(policy, item_a, item_b):
    rules = DiscountRuleSet(rules=(
        DiscountRule('B3', DiscountType.ITEM, '0.20', item_id='B', min_quantity=3),
    ))
    basket = Basket([(item_a, 1), (item_b, 2)])
    assert policy.compute_discount(rules, basket, basket.subtotal()) == Money(0)
    basket.add(item_b, 1)
    assert policy.compute_discount(rules, basket, basket.subtotal()) == Money(150)


def test_customer_scoped_rules(policy, basket_a):
    rule = DiscountRule('VIP', DiscountType.CUSTOMER, '0.15', customer_id='C1')
    assert policy.compute_discount(
        DiscountRuleSet(rules=(rule,), customer_id='C1'), basket_a, Money(2000)
    ) == Money(300)
    assert policy.compute_discount(
        DiscountRuleSet(rules=(rule,), customer_id='C2'), basket_a, Money(2000)
    ) == Money(0)
    assert policy.compute_discount(
        DiscountRuleSet(rules=(rule,)), basket_a, Money(2000)
    ) == Money(0)


def test_discount_is_clamped_to_total(policy, basket_a):
    rules = DiscountRuleSet(rules=(
        DiscountRule('HUGE', DiscountType.ITEM, '1.5', item_id='A'),
    ))
    discount = policy.compute_discount(rules, basket_a, Money(2000))
    assert discount == Money(2000)
    after = policy.compute_total_after_discount(Money(2000), discount)
    assert after == Money(0)
    assert policy.compute_vat_after_discount(after, Money(2000), Money(120)) == Money(0)


@pytest.mark.parametrize('rate', ['0', '0.01', '0.333', '0.5', '1', '2'])
def test_total_after_discount_stays_within_bounds(policy, basket_a, rate):
    rules = DiscountRuleSet(rules=(
        DiscountRule('R', DiscountType.TOTAL_THRESHOLD, rate, threshold=Money(0)),
    ))
    total = basket_a.subtotal()
    discount = policy.compute_discount(rules, basket_a, total)
    after = policy.compute_total_after_discount(total, discount)
    assert Money(0) <= after <= total


def test_vat_after_discount_with_zero_total_is_zero(policy):
    assert policy.compute_vat_after_discount(Money(0), Money(0), Money(0)) == Money(0)


def test_total_after_discount_clamps_oversized_discount(policy):
    assert policy.compute_total_after_discount(Money(100), Money(150)) == Money(0)
