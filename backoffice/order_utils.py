from datetime import datetime

from backoffice.contracts.orders import OrderStatus

TIMESTAMP_FORMAT = "%Y-%m-%d %H:%M"


def order_status_text(status, t) -> str:
    """Localized status label; unknown or empty statuses read as new."""
    values = {s.value for s in OrderStatus}
    status = status.value if isinstance(status, OrderStatus) else status
    return t(f"status.{status if status in values else OrderStatus.NEW.value}")


def _timestamp(value):
    if isinstance(value, str):
        value = datetime.fromisoformat(value.replace("Z", "+00:00"))
    return value.strftime(TIMESTAMP_FORMAT)


def _basic_info(order, t):
    lines = [
        f"{t('order.orderNumber')}: {order.get('order_id', '')}",
        f"{t('order.remark')}: {order.get('remark', '')}",
        f"{t('order.status')}: {order_status_text(order.get('order_status'), t)}",
        f"{t('order.totalAmount')}: {order.get('total_order_fee', '')}",
    ]
    if order.get("created_at"):
        lines.append(f"{t('order.createdAt')}: {_timestamp(order['created_at'])}")
    if order.get("updated_at"):
        lines.append(f"{t('order.updatedAt')}: {_timestamp(order['updated_at'])}")
    return lines


def _items(order, t):
    lines = [f"{t('order.orderDetails')}:"]
    for index, item in enumerate(order.get("order_detail") or [], start=1):
        lines += [
            f"{t('order.item')} {index}:",
            f"  {t('order.productName')}: {item.get('product_name', '')}",
            f"  {t('order.productId')}: {item.get('product_id', '')}",
            f"  {t('order.quantity')}: {item.get('size', '')}",
            f"  {t('order.price')}: {item.get('price', '')}",
        ]
        if item.get("promotion_note"):
            lines.append(f"  {t('order.discountRemark')}: {item['promotion_note']}")
    return lines


def _contact(order, t):
    contact = order.get("contact_info")
    if not contact:
        return []
    return [
        f"{t('order.contactInfo')}:",
        f"  Email: {contact.get('email', '')}",
        f"  {t('order.phone')}: {contact.get('phone', '')}",
        f"  {t('order.address')}: {contact.get('address', '')}",
    ]


def order_copy_text(order, t) -> str:
    """Plain-text summary of an order for the clipboard."""
    sections = [_basic_info(order, t), _items(order, t), _contact(order, t)]
    return "\n\n".join("\n".join(lines) for lines in sections if lines).strip()
