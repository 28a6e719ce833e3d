# storefront/services/notification_service.py
from kombu.exceptions import OperationalError

from storefront.celery_worker import celery_app
from storefront.domain.schemas import Order
from storefront.utils.settings import NOTIFICATIONS_ENABLED
from storefront.utils.logging import get_logger

logger = get_logger(__name__)


class NotificationService:
    """
    Order notifications.
    Uses Celery so the request never waits for delivery.
    """

    def __init__(self, enabled: bool = NOTIFICATIONS_ENABLED):
        self.enabled = enabled

    def send_order_notification(self, order: Order, event: str = "placed"):
        if not self.enabled:
            return None
        try:
            return send_order_notification_task.delay(
                order.user_id, order.id, order.status.value, event
            )
        except OperationalError as e:
            # the order is already stored, a broker outage must not undo it
            logger.error(f"Could not enqueue notification for order {order.id}: {e}")
            return None


@celery_app.task(name="storefront.services.notification_service.send_order_notification_task")
def send_order_notification_task(user_id: str, order_id: str, status: str, event: str):
    """
    A real deployment would hand this to an email/SMS gateway. Here it only logs.
    """
    logger.info(f"[NOTIFICATION] User {user_id}: order {order_id} {event} (status {status})")

    return {"user_id": user_id, "order_id": order_id, "status": status, "event": event}
