"""Tests for discount code evaluation and administration."""
from datetime import timedelta
from decimal import Decimal

import pytest

from app.core.exceptions import BusinessRuleError, ConflictError, NotFoundError, ValidationError
from app.modules.discounts.schemas import DiscountCreate, DiscountUpdate
from app.modules.discounts.service import DiscountService
from app.shared.enums import DiscountType
from app.shared.time import utc_now


# ==================== EVALUACIÓN ====================

def test_percentage_discount_on_subtotal(db, make_discount):
    make_discount(code="SAVE10", value="10")

    evaluation = DiscountService(db).evaluate("SAVE10", Decimal("200.00"))

    assert evaluation.valid is True
    assert evaluation.amount == Decimal("20.00")
    assert evaluation.reason is None


def test_fixed_amount_discount_is_not_clamped(db, make_discount):
    make_discount(code="MINUS50", type=DiscountType.FIXED_AMOUNT, value="50")

    evaluation = DiscountService(db).evaluate("MINUS50", Decimal("30.00"))

    assert evaluation.valid is True
    assert evaluation.amount == Decimal("50.00")


def test_unknown_code_is_rejected(db):
    evaluation = DiscountService(db).evaluate("NOPE", Decimal("100"))

    assert evaluation.valid is False
    assert evaluation.reason == "not_found"
    assert evaluation.discount is None


def test_inactive_discount_is_rejected(db, make_discount):
    make_discount(code="OFF", is_active=False)

    evaluation = DiscountService(db).evaluate("OFF", Decimal("100"))

    assert evaluation.reason == "inactive"


def test_discount_outside_window_is_rejected(db, make_discount):
    now = utc_now()
    make_discount(code="OLD", start_date=now - timedelta(days=10), end_date=now - timedelta(days=1))
    make_discount(code="SOON", start_date=now + timedelta(days=1), end_date=now + timedelta(days=10))

    service = DiscountService(db)

    assert service.evaluate("OLD", Decimal("100")).reason == "out_of_window"
    assert service.evaluate("SOON", Decimal("100")).reason == "out_of_window"


def test_window_boundaries_are_inclusive(db, make_discount):
    discount = make_discount(code="EDGE")

    service = DiscountService(db)

    assert service.evaluate("EDGE", Decimal("100"), now=discount.start_date).valid is True
    assert service.evaluate("EDGE", Decimal("100"), now=discount.end_date).valid is True


def test_min_purchase_is_enforced(db, make_discount):
    make_discount(code="MIN100", min_purchase="100")

    service = DiscountService(db)

    assert service.evaluate("MIN100", Decimal("99.99")).reason == "below_minimum"
    assert service.evaluate("MIN100", Decimal("100.00")).valid is True


def test_exhausted_uses_are_rejected(db, make_discount):
    make_discount(code="ONCE", max_uses=1, used_count=1)

    evaluation = DiscountService(db).evaluate("ONCE", Decimal("100"))

    assert evaluation.reason == "exhausted_uses"
    assert isinstance(evaluation.to_error(), ConflictError)
    assert evaluation.to_error().reason == "discount_exhausted_uses"


def test_rejection_maps_to_business_rule_error(db, make_discount):
    make_discount(code="OFF", is_active=False)

    error = DiscountService(db).evaluate("OFF", Decimal("100")).to_error()

    assert isinstance(error, BusinessRuleError)
    assert error.status_code == 400
    assert error.reason == "discount_inactive"


def test_evaluate_strips_surrounding_spaces(db, make_discount):
    make_discount(code="SAVE10", value="10")

    evaluation = DiscountService(db).evaluate("  SAVE10 ", Decimal("200.00"))

    assert evaluation.valid is True
    assert evaluation.amount == Decimal("20.00")


def test_evaluate_does_not_increment_used_count(db, make_discount):
    discount = make_discount(code="COUNT", max_uses=5)

    service = DiscountService(db)
    service.evaluate("COUNT", Decimal("100"))
    service.evaluate("COUNT", Decimal("100"))

    db.refresh(discount)
    assert discount.used_count == 0


# ==================== ADMINISTRACIÓN ====================

def test_create_discount_rejects_percentage_over_100():
    now = utc_now()
    with pytest.raises(ValueError):
        DiscountCreate(
            code="BAD", type=DiscountType.PERCENTAGE, value=Decimal("150"),
            start_date=now, end_date=now + timedelta(days=1)
        )


def test_create_discount_rejects_non_positive_fixed_amount():
    now = utc_now()
    with pytest.raises(ValueError):
        DiscountCreate(
            code="BAD", type=DiscountType.FIXED_AMOUNT, value=Decimal("0"),
            start_date=now, end_date=now + timedelta(days=1)
        )


def test_create_discount_rejects_inverted_window():
    now = utc_now()
    with pytest.raises(ValueError):
        DiscountCreate(
            code="BAD", type=DiscountType.PERCENTAGE, value=Decimal("10"),
            start_date=now, end_date=now - timedelta(days=1)
        )


def test_create_discount_rejects_duplicate_code(db, make_discount):
    make_discount(code="SAVE10")
    now = utc_now()

    with pytest.raises(ValidationError) as exc_info:
        DiscountService(db).create_discount(DiscountCreate(
            code="SAVE10", type=DiscountType.PERCENTAGE, value=Decimal("5"),
            start_date=now, end_date=now + timedelta(days=1)
        ))

    assert exc_info.value.reason == "duplicate_code"


def test_update_validates_resulting_record(db, make_discount):
    discount = make_discount(code="SAVE10", value="10")

    with pytest.raises(ValidationError):
        DiscountService(db).update_discount(discount.id, DiscountUpdate(value=Decimal("120")))

    updated = DiscountService(db).update_discount(discount.id, DiscountUpdate(value=Decimal("15")))
    assert updated.value == Decimal("15.00")


def test_get_missing_discount_raises_not_found(db):
    with pytest.raises(NotFoundError):
        DiscountService(db).get_discount(999)


def test_discount_api_crud_and_validate(client, auth_headers):
    now = utc_now()
    payload = {
        "code": "  WELCOME  ",
        "type": "PERCENTAGE",
        "value": "25",
        "min_purchase": "50",
        "start_date": (now - timedelta(days=1)).isoformat(),
        "end_date": (now + timedelta(days=1)).isoformat(),
        "max_uses": 10
    }

    response = client.post("/api/v1/discounts", json=payload, headers=auth_headers)
    assert response.status_code == 201
    created = response.json()
    assert created["code"] == "WELCOME"
    assert created["used_count"] == 0

    response = client.post(
        "/api/v1/discounts/validate",
        json={"code": "WELCOME", "amount": "80"},
        headers=auth_headers
    )
    assert response.status_code == 200
    assert response.json()["valid"] is True
    assert Decimal(response.json()["amount"]) == Decimal("20.00")

    response = client.post(
        "/api/v1/discounts/validate",
        json={"code": "WELCOME", "amount": "10"},
        headers=auth_headers
    )
    assert response.json()["valid"] is False
    assert response.json()["reason"] == "below_minimum"

    response = client.delete(f"/api/v1/discounts/{created['id']}", headers=auth_headers)
    assert response.status_code == 200

    response = client.get(f"/api/v1/discounts/{created['id']}", headers=auth_headers)
    assert response.status_code == 404
    assert response.json()["reason"] == "not_found"


def test_discount_api_rejects_invalid_payload(client, auth_headers):
    now = utc_now()
    response = client.post("/api/v1/discounts", json={
        "code": "BAD",
        "type": "PERCENTAGE",
        "value": "101",
        "start_date": now.isoformat(),
        "end_date": (now + timedelta(days=1)).isoformat()
    }, headers=auth_headers)

    assert response.status_code == 400
    assert response.json()["reason"] == "validation_error"


@pytest.mark.parametrize("field", ["code", "type", "value", "start_date", "end_date", "is_active"])
def test_discount_api_update_rejects_null_required_fields(client, auth_headers, make_discount, field):
    discount = make_discount(code="SAVE10")

    response = client.put(f"/api/v1/discounts/{discount.id}", json={field: None}, headers=auth_headers)

    assert response.status_code == 400
    assert response.json()["reason"] == "validation_error"


def test_discount_api_update_clears_optional_limits(client, auth_headers, make_discount):
    discount = make_discount(code="SAVE10", min_purchase="100", max_uses=5)

    response = client.put(
        f"/api/v1/discounts/{discount.id}",
        json={"min_purchase": None, "max_uses": None, "code": "  SAVE15  "},
        headers=auth_headers
    )

    assert response.status_code == 200
    body = response.json()
    assert body["min_purchase"] is None
    assert body["max_uses"] is None
    assert body["code"] == "SAVE15"
