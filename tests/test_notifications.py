import pytest

from clinic.core.config import settings
from clinic.models.notification import Notification, NotificationType
from clinic.services import email_service
from clinic.services.exceptions import NotFound
from clinic.services.notification_service import (
    list_notifications,
    mark_notification_read,
    notify,
    resolve_recipient,
)


async def test_notifications_are_scoped_to_their_target(session):
    await notify(session, "2", NotificationType.appointment_approved, "for physio 2")
    mine = await notify(session, "3", NotificationType.appointment_requested, "for physio 3")

    assert [n.message for n in await list_notifications(session, ["3"])] == ["for physio 3"]
    with pytest.raises(NotFound):
        await mark_notification_read(session, mine.id, ["2"])

    read = await mark_notification_read(session, mine.id, ["3"])
    assert read.read is True
    assert await list_notifications(session, ["3"], unread_only=True) == []


async def test_resolve_recipient(session):
    physio = Notification(user_id="3", type=NotificationType.appointment_requested, message="m")
    inbox = Notification(user_id=settings.reception_inbox_id, type=NotificationType.appointment_approved, message="m")
    no_account = Notification(user_id="9", type=NotificationType.appointment_approved, message="m")

    assert await resolve_recipient(session, physio) == ("physio2@clinic.com", "Dr. Mike Johnson")
    assert await resolve_recipient(session, inbox) == (settings.reception_inbox_id, None)
    # Patient "9" has no login, so there is no address to mail
    assert await resolve_recipient(session, no_account) is None


def test_email_skipped_when_smtp_not_configured(monkeypatch):
    def fail(*args, **kwargs):
        raise AssertionError("SMTP must not be used")

    monkeypatch.setattr(email_service.smtplib, "SMTP", fail)
    email_service.send_notification_email(
        to_email="physio2@clinic.com",
        recipient_name="Dr. Mike Johnson",
        notification_type=NotificationType.appointment_requested,
        message="New appointment",
    )


def test_notification_html_escapes_message():
    html = email_service.build_notification_html("<b>Ann</b>", "Appointment Approved", "a < b & c")
    assert "&lt;b&gt;Ann&lt;/b&gt;" in html
    assert "a &lt; b &amp; c" in html
    assert "Appointment Approved" in html
