"""Product image storage. Uploads raise on failure so the caller's mutation reports the message."""
from backoffice.contracts.product import product_contract
from backoffice.errors import BackofficeError
from backoffice.hooks.base import authorized_client, notify_error, unwrap


class ImageUploadError(BackofficeError):
    pass


def upload_image(ctx, file_name, file_value):
    """Store one base64 payload; returns ``{"file_name", "file_url"}``."""
    token = ctx.auth.get_token()
    if not token:
        raise ImageUploadError(ctx.t("toast.auth.unauthorized.description"))
    response = ctx.client(product_contract, token).upload_product_image(
        body={"file_name": file_name, "file_value": file_value}
    )
    if response.status != 200:
        raise ImageUploadError(ctx.t("toast.img.upload.error"))
    return unwrap(response.body) or {}


def delete_images(ctx, file_names):
    """Returns the deleted names, or None after notifying."""
    client = authorized_client(ctx, product_contract)
    if client is None:
        return None
    file_names = list(file_names)
    response = client.delete_product_image(body={"file_names": file_names})
    if response.status != 200:
        notify_error(ctx, "toast.img.delete.error")
        return None
    return file_names
