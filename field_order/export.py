"""CSV construction and the save/share export routine."""

from __future__ import annotations

import asyncio
import csv
import io
import logging
from dataclasses import dataclass
from datetime import datetime, timezone
from pathlib import Path
from typing import Callable, Iterable

from field_order.config import EXPORT_MODES, EXPORT_SUBDIR
from field_order.constant import (
    CSV_HEADER,
    EMPTY_FIELD_TEXT,
    LATITUDE_LABEL,
    LONGITUDE_LABEL,
    NO_LOCATION_TEXT,
    NOTES_LABEL,
    STORE_LABEL,
    VAT_LABEL,
)
from field_order.errors import NoProductsSelected, PermissionDenied, ShareFailure, WriteFailure
from field_order.models import CustomerInfo, ExportArtifact, Location, OrderSnapshot, Product
from field_order.sharing import SharePayload, file_payload, inline_payload

logger = logging.getLogger(__name__)

_LINE_TERMINATOR = "\n"


@dataclass(frozen=True)
class ExportResult:
    artifact: ExportArtifact
    path: Path | None
    shared: bool
    message: str


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


def build_csv(
    lines: Iterable[tuple[Product, int]],
    customer: CustomerInfo,
    location: Location | None,
) -> str:
    """
    Render the order as CSV text.

    Fields holding a comma, quote or newline are quoted; everything else is
    written verbatim. Quantities are written as parsed integers, so an entry
    typed as ``03`` is exported as ``3``. There is no trailing newline.
    """
    buf = io.StringIO()
    writer = csv.writer(buf, lineterminator=_LINE_TERMINATOR)
    writer.writerow(CSV_HEADER)
    for product, qty in lines:
        writer.writerow((product.code, product.description, qty))

    writer.writerow(())
    writer.writerow((STORE_LABEL, customer.store or EMPTY_FIELD_TEXT))
    writer.writerow((VAT_LABEL, customer.vat or EMPTY_FIELD_TEXT))
    writer.writerow((NOTES_LABEL, customer.notes or EMPTY_FIELD_TEXT))
    if location is not None:
        writer.writerow((LATITUDE_LABEL, location.latitude))
        writer.writerow((LONGITUDE_LABEL, location.longitude))
    else:
        writer.writerow((LATITUDE_LABEL, NO_LOCATION_TEXT))
        writer.writerow((LONGITUDE_LABEL, NO_LOCATION_TEXT))
    return buf.getvalue()[: -len(_LINE_TERMINATOR)]


def export_file_name(now: datetime) -> str:
    """Format ``order_<ISO8601>.csv`` with ``:`` and ``.`` replaced by ``-``."""
    if now.tzinfo is None:
        now = now.replace(tzinfo=timezone.utc)
    stamp = now.astimezone(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")
    return f"order_{stamp.replace(':', '-').replace('.', '-')}.csv"


def build_artifact(snapshot: OrderSnapshot, now: datetime) -> ExportArtifact:
    if not snapshot.lines:
        raise NoProductsSelected()
    content = build_csv(snapshot.lines, snapshot.customer, snapshot.location)
    return ExportArtifact(file_name=export_file_name(now), content=content)


def _write_file(path: Path, content: str) -> Path:
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content, encoding="utf-8")
    except OSError as exc:
        raise WriteFailure(f"Could not write {path}: {exc}") from exc
    return path


class ExportRoutine:
    """
    Turn a form snapshot into a saved or shared CSV file.

    ``library`` mode saves into ``<export_dir>/Downloads/Orders`` and shares
    the content inline if saving fails. ``share`` mode writes into the cache
    directory and shares the file path.
    """

    def __init__(
        self,
        mode: str,
        export_dir: Path,
        cache_dir: Path,
        share: Callable[[SharePayload], None],
        clock: Callable[[], datetime] = _utc_now,
    ) -> None:
        if mode not in EXPORT_MODES:
            raise ValueError(f"mode must be one of {', '.join(EXPORT_MODES)}")
        self.mode = mode
        self.export_dir = Path(export_dir)
        self.cache_dir = Path(cache_dir)
        self._share = share
        self._clock = clock

    @property
    def needs_storage_permission(self) -> bool:
        return self.mode == "library"

    def run(self, snapshot: OrderSnapshot, storage_granted: bool = True) -> ExportResult:
        artifact = build_artifact(snapshot, self._clock())
        return self.deliver(artifact, self.store(artifact, storage_granted))

    async def run_async(self, snapshot: OrderSnapshot, storage_granted: bool = True) -> ExportResult:
        """Like ``run`` but with the file write in a thread; sharing stays on the caller's loop."""
        artifact = build_artifact(snapshot, self._clock())
        path = await asyncio.to_thread(self.store, artifact, storage_granted)
        return self.deliver(artifact, path)

    def store(self, artifact: ExportArtifact, storage_granted: bool = True) -> Path | None:
        """Write the artifact. Returns None when the write failed and sharing inline is needed."""
        try:
            if self.mode == "library":
                path = self._save_to_library(artifact, storage_granted)
                logger.info("Export saved to %s", path)
                return path
            return _write_file(self.cache_dir / artifact.file_name, artifact.content)
        except WriteFailure as exc:
            logger.warning("Save failed, sharing inline instead: %s", exc)
            return None

    def deliver(self, artifact: ExportArtifact, path: Path | None) -> ExportResult:
        if path is None:
            self._invoke_share(inline_payload(artifact))
            return ExportResult(artifact=artifact, path=None, shared=True, message=f"Shared {artifact.file_name}")

        if self.mode == "library":
            return ExportResult(
                artifact=artifact,
                path=path,
                shared=False,
                message=f"File saved to {EXPORT_SUBDIR.as_posix()}/{artifact.file_name}",
            )

        self._invoke_share(file_payload(path))
        logger.info("Export shared from %s", path)
        return ExportResult(artifact=artifact, path=path, shared=True, message=f"Shared {artifact.file_name}")

    def _save_to_library(self, artifact: ExportArtifact, storage_granted: bool) -> Path:
        if not storage_granted:
            raise WriteFailure("Storage permission is required") from PermissionDenied("storage")
        return _write_file(self.export_dir / EXPORT_SUBDIR / artifact.file_name, artifact.content)

    def _invoke_share(self, payload: SharePayload) -> None:
        try:
            self._share(payload)
        except ShareFailure:
            raise
        except Exception as exc:
            raise ShareFailure(f"Could not share the export: {exc}") from exc
