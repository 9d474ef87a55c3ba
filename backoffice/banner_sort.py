"""
Banner ordering

Active banners are shown in ``sort_order`` (1-based), ties broken by
creation time. Reorder, promote and demote each rewrite the affected
banners through the banner update endpoint; only one of them may run at a
time.
"""
import logging
from contextlib import contextmanager
from datetime import datetime
from typing import Callable, List, Mapping, Optional

from backoffice.errors import BackofficeError
from backoffice.hooks.banners import update_banner
from backoffice.schemas import ActiveStatus

logger = logging.getLogger(__name__)

INACTIVE_SORT_ORDER = 9


class BannerSortError(BackofficeError):
    pass


def _created(banner):
    value = banner.get("created_at")
    if isinstance(value, datetime):
        return value.timestamp()
    if isinstance(value, str) and value:
        return datetime.fromisoformat(value.replace("Z", "+00:00")).timestamp()
    return 0


def sort_banners(banners: List[Mapping]) -> List[dict]:
    return sorted((dict(b) for b in banners), key=lambda b: (b.get("sort_order") or 0, _created(b)))


class BannerSorter:
    def __init__(self, ctx, active: List[Mapping], inactive: List[Mapping],
                 update: Optional[Callable[[dict], bool]] = None):
        self.ctx = ctx
        self.active = sort_banners(active)
        self.inactive = [dict(b) for b in inactive]
        self._original = [dict(b) for b in self.active]
        self._update = update or self._send_update
        self.operation: Optional[str] = None

    def _send_update(self, banner):
        return update_banner(self.ctx, banner, notify=False).is_success

    def _write(self, banner):
        if not self._update(banner):
            raise BannerSortError(f"Failed to update banner {banner.get('banner_id')}")

    def _notify(self, variant, key):
        text = self.ctx.t(key)
        if variant == "success":
            self.ctx.notifier.success(text, text)
        else:
            self.ctx.notifier.error(text, text)

    @property
    def busy(self):
        return self.operation is not None

    @contextmanager
    def _exclusive(self, name):
        self.operation = name
        try:
            yield
        finally:
            self.operation = None

    def _conflict(self, name):
        self.ctx.notifier.error(
            self.ctx.t("toast.banner.operationConflict.title"),
            self.ctx.t(f"toast.banner.operationConflict.{name}Description"),
        )
        return False

    def reorder(self, new_order: List[Mapping]) -> bool:
        """Persist a dragged order; only banners whose position changed are written."""
        if self.busy:
            return self._conflict("reorder")
        with self._exclusive("reorder"):
            self.active = [dict(b) for b in new_order]
            moved = [
                dict(banner, sort_order=position)
                for position, banner in enumerate(self.active, start=1)
                if banner.get("sort_order") != position
            ]
            try:
                for banner in moved:
                    self._write(banner)
            except BannerSortError as e:
                logger.warning("Reorder failed: %s", e)
                self.ctx.notifier.error(self.ctx.t("toast.banner.reorder.error"),
                                        self.ctx.t("toast.banner.reorder.errorDescription"))
                self.active = [dict(b) for b in self._original]
                return False
            for banner in moved:
                self.active[banner["sort_order"] - 1] = banner
            if moved:
                self._notify("success", "toast.banner.reorder.success")
            self._original = [dict(b) for b in self.active]
            return True

    def promote(self, banner: Mapping) -> bool:
        """Make an inactive banner active at the end of the list."""
        if self.busy:
            return self._conflict("promote")
        with self._exclusive("promote"):
            promoted = dict(banner, banner_status=ActiveStatus.ACTIVE.value, sort_order=len(self.active) + 1)
            try:
                self._write(promoted)
            except BannerSortError as e:
                logger.warning("Promote failed: %s", e)
                self._notify("error", "toast.banner.promoteToActive.error")
                return False
            self.active.append(promoted)
            self.inactive = [b for b in self.inactive if b.get("banner_id") != banner.get("banner_id")]
            self._original = [dict(b) for b in self.active]
            self._notify("success", "toast.banner.promoteToActive.success")
            return True

    def demote(self, banner: Mapping) -> bool:
        """Deactivate a banner and close the gap it leaves."""
        if self.busy:
            return self._conflict("demote")
        with self._exclusive("demote"):
            target = banner.get("sort_order") or 0
            demoted = dict(banner, banner_status=ActiveStatus.INACTIVE.value, sort_order=INACTIVE_SORT_ORDER)
            shifted = [
                dict(b, sort_order=(b.get("sort_order") or 0) - 1)
                for b in self.active
                if (b.get("sort_order") or 0) > target and b.get("banner_id") != banner.get("banner_id")
            ]
            try:
                for update in [demoted] + shifted:
                    self._write(update)
            except BannerSortError as e:
                logger.warning("Demote failed: %s", e)
                self._notify("error", "toast.banner.removeFromActive.error")
                self.active = [dict(b) for b in self._original]
                return False
            by_id = {b["banner_id"]: b for b in shifted}
            self.active = [
                by_id.get(b.get("banner_id"), b) for b in self.active if b.get("banner_id") != banner.get("banner_id")
            ]
            self.inactive.append(demoted)
            self._original = [dict(b) for b in self.active]
            self._notify("success", "toast.banner.removeFromActive.success")
            return True
