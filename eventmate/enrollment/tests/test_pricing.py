from decimal import Decimal

import pytest

from eventmate.enrollment.errors import InvalidPromoCodeError, PromoNotAllowedError
from eventmate.enrollment.pricing import BillSummary, base_price
from eventmate.enrollment.tests.inmemory_models import make_paid_event, make_tier


def test_base_price_uses_selected_tier():
    event = make_paid_event()
    vip = make_tier(2, "VIP", "1200")

    assert base_price(event, vip) == Decimal("1200")


def test_base_price_falls_back_to_flat_price_then_zero():
    assert base_price(make_paid_event(), None) == Decimal("500")
    assert base_price(make_paid_event(ticket_price=None), None) == Decimal("0")


def test_new_bill_charges_base_price():
    bill = BillSummary.for_booking(make_paid_event(), None)

    assert bill.ticket_name == "Standard"
    assert bill.final_amount == Decimal("500")
    assert bill.discount_applied is False


@pytest.mark.parametrize("code", ["SAVE10", "save10", "  Save10 "])
def test_matching_code_applies_discount(code):
    event = make_paid_event()
    bill = BillSummary.for_booking(event, None)

    percentage = bill.apply_promo(code, event)

    assert percentage == Decimal("10")
    assert bill.discount == Decimal("50")
    assert bill.final_amount == Decimal("450")
    assert bill.final_amount == bill.base_price * (1 - percentage / 100)
    assert bill.discount_applied is True


def test_wrong_code_resets_to_base_price():
    event = make_paid_event()
    bill = BillSummary.for_booking(event, None)
    bill.apply_promo("SAVE10", event)

    with pytest.raises(InvalidPromoCodeError):
        bill.apply_promo("SAVE20", event)

    assert bill.discount == Decimal("0")
    assert bill.final_amount == Decimal("500")
    assert bill.discount_applied is False


def test_empty_code_is_invalid():
    event = make_paid_event()
    bill = BillSummary.for_booking(event, None)

    with pytest.raises(InvalidPromoCodeError):
        bill.apply_promo("", event)
    assert bill.final_amount == Decimal("500")


def test_event_without_coupon_code_rejects_everything():
    event = make_paid_event(coupon_code=None)
    bill = BillSummary.for_booking(event, None)

    with pytest.raises(InvalidPromoCodeError):
        bill.apply_promo("SAVE10", event)


def test_coupons_rejected_when_event_disallows_them():
    event = make_paid_event(allow_coupon=False)
    bill = BillSummary.for_booking(event, None)

    with pytest.raises(PromoNotAllowedError):
        bill.apply_promo("SAVE10", event)

    assert bill.final_amount == Decimal("500")
    assert bill.discount_applied is False


def test_discount_applies_to_tier_price():
    event = make_paid_event(discount_percentage=Decimal("25"))
    bill = BillSummary.for_booking(event, make_tier(3, "Early Bird", "200"))

    bill.apply_promo("save10", event)

    assert bill.discount == Decimal("50")
    assert bill.final_amount == Decimal("150")
