"""Tests for the notification emitter and inbox."""
import pytest

from app.core.exceptions import NotFoundError
from app.modules.notifications.service import NotificationService
from app.shared.database.models import User
from app.shared.enums import NotificationType


def test_create_notification(db, user):
    notification = NotificationService(db).create(user.id, NotificationType.SALE, "Venta grande")

    assert notification.id is not None
    assert notification.is_read is False
    assert notification.type == NotificationType.SALE


def test_create_never_raises(db):
    # Usuario inexistente: la llave foránea falla y el error se absorbe
    assert NotificationService(db).create(4242, NotificationType.STOCK_LOW, "Stock bajo") is None


def test_inbox_is_scoped_to_user(db, user):
    other = User(email="otro@operantis.test", first_name="Otro", last_name="Usuario")
    db.add(other)
    db.commit()

    service = NotificationService(db)
    mine = service.create(user.id, NotificationType.SALE, "mía")
    service.create(other.id, NotificationType.SALE, "ajena")

    assert [n.id for n in service.get_user_notifications(user.id)] == [mine.id]
    with pytest.raises(NotFoundError):
        service.mark_as_read(mine.id, other.id)


def test_mark_all_as_read(db, user):
    service = NotificationService(db)
    service.create(user.id, NotificationType.STOCK_LOW, "uno")
    service.create(user.id, NotificationType.STOCK_LOW, "dos")

    assert service.mark_all_as_read(user.id) == 2
    assert service.get_unread_notifications(user.id) == []


def test_notification_api(client, auth_headers, db, user):
    service = NotificationService(db)
    first = service.create(user.id, NotificationType.STOCK_LOW, "Stock bajo")
    second = service.create(user.id, NotificationType.SALE, "Venta grande")

    response = client.get("/api/v1/notifications", headers=auth_headers)
    assert response.status_code == 200
    assert [n["id"] for n in response.json()] == [second.id, first.id]

    response = client.put(f"/api/v1/notifications/{first.id}/read", headers=auth_headers)
    assert response.status_code == 200
    assert response.json()["is_read"] is True

    response = client.get("/api/v1/notifications/unread", headers=auth_headers)
    assert [n["id"] for n in response.json()] == [second.id]

    response = client.put("/api/v1/notifications/read-all", headers=auth_headers)
    assert response.status_code == 200

    response = client.delete(f"/api/v1/notifications/{second.id}", headers=auth_headers)
    assert response.status_code == 200

    response = client.delete(f"/api/v1/notifications/{second.id}", headers=auth_headers)
    assert response.status_code == 404
