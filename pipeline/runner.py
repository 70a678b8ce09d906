"""
The relay pipeline. One pass over every configured source.

Per source:
    fetch -> normalize -> select (against the stored cursor)
          -> for each item, oldest first: enrich, publish, notify, advance
          -> commit the cursor that was reached

Items are handled one at a time, in id order. The cursor only moves past
an item once both sinks accepted it, so the stored value is always the
last id of a fully delivered prefix of the queue. A failure stops the
source's queue; everything from the failed item on is retried next run.

No locking. Two overlapping runs for the same source can clobber each
other's cursor (last writer wins). The scheduler must not overlap them.
"""

import logging

from collectors.base import FeedFetcher
from delivery.base import NotificationSink, PrimarySink
from delivery.bluesky import prepare_post
from delivery.slack import build_notification
from filters.normalizer import normalize_batch
from filters.selector import select_new
from models import NormalizedItem, SourceResult, SourceStatus
from storage.base import CursorStore
from synthesizer.engine import Enricher

log = logging.getLogger(__name__)


class Relay:
    def __init__(
        self,
        fetcher: FeedFetcher,
        store: CursorStore,
        enricher: Enricher,
        primary: PrimarySink,
        notifier: NotificationSink,
        max_post_length: int = 300,
        checkpoint: bool = True,
    ):
        self._fetcher = fetcher
        self._store = store
        self._enricher = enricher
        self._primary = primary
        self._notifier = notifier
        self._max_post_length = max_post_length
        self._checkpoint = checkpoint

    def run(self, sources: list[str]) -> list[SourceResult]:
        """
        Process sources one after another.

        A bad feed or a failed delivery only affects its own source.
        StoreError is not caught: without a trustworthy cursor the whole
        run is a failure.
        """
        results = []
        for source_id in sources:
            result = self.process_source(source_id)
            log.info(f"{source_id}: {result.status.value} ({result.cursor_before} -> {result.cursor_after})")
            results.append(result)
        return results

    def process_source(self, source_id: str) -> SourceResult:
        cursor = self._store.get(source_id)

        try:
            raw_items = self._fetcher.fetch(source_id)
        except Exception as e:
            log.warning(f"{self._fetcher.name()} fetch failed for {source_id}, treating as empty: {e}")
            return SourceResult(
                source_id=source_id,
                status=SourceStatus.FETCH_FAILED,
                cursor_before=cursor,
                cursor_after=cursor,
                error=str(e),
            )

        queue = self.pending(raw_items, cursor)
        log.info(f"{source_id}: {len(raw_items)} fetched, {len(queue)} new since {cursor}")

        if not queue:
            return SourceResult(
                source_id=source_id,
                status=SourceStatus.NO_NEW_ITEMS,
                cursor_before=cursor,
                cursor_after=cursor,
            )

        reached, delivered, error = self.deliver_queue(source_id, queue, cursor)
        committed = self.commit_checkpoint(source_id, cursor, reached)

        if error is None:
            status = SourceStatus.COMPLETED
        elif delivered:
            status = SourceStatus.PARTIAL
        else:
            status = SourceStatus.FAILED

        return SourceResult(
            source_id=source_id,
            status=status,
            cursor_before=cursor,
            cursor_after=reached,
            delivered=delivered,
            pending=[item.id for item in queue[len(delivered):]],
            committed=committed,
            error=error,
        )

    @staticmethod
    def pending(raw_items: list[dict], cursor: str) -> list[NormalizedItem]:
        """The queue a run would deliver: normalized, past the cursor, oldest first."""
        return select_new(normalize_batch(raw_items), cursor)

    def deliver_queue(
        self,
        source_id: str,
        queue: list[NormalizedItem],
        cursor: str,
    ) -> tuple[str, list[str], str | None]:
        """
        Enrich and deliver items in order until one fails.

        Any exception from the enricher or a sink stops the queue here, so
        the delivered prefix still gets committed and later sources still run.

        Returns (cursor reached, delivered ids, error or None). The cursor
        reached is the id of the last item both sinks accepted.
        """
        reached = cursor
        delivered: list[str] = []

        for item in queue:
            try:
                summary = self._enricher.enrich(item)
                post = prepare_post(summary, item.url, self._max_post_length)
                ref = self._primary.publish(post)
                log.debug(f"{source_id}: {item.id} published to {self._primary.name()} ({ref})")
                self._notifier.notify(build_notification(item, summary, source_id))
            except Exception as e:
                log.error(
                    f"{source_id}: item {item.id} failed, "
                    f"stopping with {len(queue) - len(delivered)} left: {e}"
                )
                return reached, delivered, f"{item.id}: {e}"

            reached = item.id
            delivered.append(item.id)
            log.info(f"{source_id}: delivered {item.id}")

        return reached, delivered, None

    def commit_checkpoint(self, source_id: str, cursor_before: str, reached: str) -> bool:
        """Write the reached cursor if anything was delivered. Returns True if written."""
        if reached == cursor_before:
            log.debug(f"{source_id}: nothing delivered, cursor stays at {cursor_before}")
            return False

        if not self._checkpoint:
            log.warning(f"{source_id}: checkpointing disabled, would have set cursor to {reached}")
            return False

        self._store.set(source_id, reached)
        log.info(f"{source_id}: cursor {cursor_before} -> {reached}")
        return True


def all_ok(results: list[SourceResult]) -> bool:
    return all(r.ok for r in results)
