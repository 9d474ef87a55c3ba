import base64
import logging
from typing import Iterable, List, Mapping, Optional, Union

from backoffice.hooks.base import MutationState, mutate
from backoffice.hooks.images import delete_images, upload_image

logger = logging.getLogger(__name__)


def encode_file(data: bytes) -> str:
    return base64.b64encode(data).decode("ascii")


class ImageUploader:
    """Images attached to one form, kept in step with the image store."""

    def __init__(self, ctx, images: Optional[Iterable[Mapping]] = None):
        self.ctx = ctx
        self.images: List[dict] = [dict(image) for image in images or []]

    @property
    def file_names(self):
        return [image["file_name"] for image in self.images]

    def upload(self, file_name: str, data: Union[bytes, str]) -> MutationState:
        payload = data if isinstance(data, str) else encode_file(data)

        def added(stored):
            file_url = stored.get("file_url")
            if not file_url:
                logger.warning("Upload of %s returned no URL", file_name)
                return
            self.images.append({"file_name": file_name, "file_url": file_url})
            self.ctx.notifier.success(self.ctx.t("common.success"), self.ctx.t("toast.img.upload.success"))

        return mutate(self.ctx, lambda: upload_image(self.ctx, file_name, payload), on_success=added)

    def remove(self, target: Union[str, Iterable[Mapping]]) -> MutationState:
        """Delete by file name, or every image in a list of image records."""
        names = [target] if isinstance(target, str) else [image["file_name"] for image in target]

        def removed(deleted):
            self.images = [image for image in self.images if image["file_name"] not in deleted]
            self.ctx.notifier.success(self.ctx.t("common.success"), self.ctx.t("toast.img.delete.success"))

        return mutate(self.ctx, lambda: delete_images(self.ctx, names), on_success=removed)
