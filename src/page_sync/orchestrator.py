"""Page synchronization orchestrator.

This module provides the PageSyncOrchestrator that publishes one local file
to one Confluence page. Each run walks a small state machine:

    INIT → READING_FILE → CONVERTING → FETCHING_REMOTE
         → CREATING (page not found) | UPDATING (page found)
         → SUCCEEDED | FAILED

The local file is read before any remote call, so a missing file never
leaves a partial remote change behind. Updates are single-attempt: the
observed version is sent back and Confluence rejects stale writes.
"""

import difflib
import logging
from typing import Optional

from src.confluence_client.api_wrapper import APIWrapper
from src.confluence_client.errors import PageNotFoundError
from src.content_converter import ContentType, ConverterOptions, convert_to_storage
from src.models.confluence_page import ConfluencePage
from src.sync_config.models import PageMapping, SyncConfiguration

from .errors import LocalFileDecodeError, LocalFileNotFoundError, PageSyncError
from .models import PageOutcome, SyncAction, SyncPhase, SyncStatus
from .page_logger import PageLogger

logger = logging.getLogger(__name__)


class PageSyncOrchestrator:
    """Creates or updates one Confluence page from one local file.

    The orchestrator holds only read-only state (configuration, API client,
    converter options), so a single instance can run many pages
    concurrently.

    Example:
        >>> orchestrator = PageSyncOrchestrator(config, api)
        >>> outcome = orchestrator.sync(config.pages[0])
        >>> outcome.action
        <SyncAction.UPDATED: 'updated'>
    """

    def __init__(
        self,
        config: SyncConfiguration,
        api: APIWrapper,
        dry_run: bool = False,
        converter_options: Optional[ConverterOptions] = None,
    ):
        """Initialize the orchestrator.

        Args:
            config: Shared sync configuration
            api: Remote page client
            dry_run: Fetch and compare but never write to the remote
            converter_options: Format-specific conversion switches
        """
        self.config = config
        self.api = api
        self.dry_run = dry_run
        self.converter_options = converter_options or ConverterOptions()

    def sync(self, mapping: PageMapping) -> PageOutcome:
        """Sync one page mapping.

        Args:
            mapping: The page mapping to publish

        Returns:
            PageOutcome with status SUCCESS

        Raises:
            PageSyncError: If any step fails; carries the failed outcome and
                is chained to the original exception
        """
        log = PageLogger(logger, mapping.page_id)
        log.info(
            f"Starting sync for page {mapping.page_id}: "
            f"{mapping.file} -> {mapping.title or 'untitled'}"
        )
        phase = self._enter(SyncPhase.INIT, log)

        try:
            phase = self._enter(SyncPhase.READING_FILE, log)
            content = self._read_file(mapping, log)

            phase = self._enter(SyncPhase.CONVERTING, log)
            body = self._convert(mapping, content, log)

            phase = self._enter(SyncPhase.FETCHING_REMOTE, log)
            remote = self._fetch_remote(mapping, log)

            if remote is None:
                phase = self._enter(SyncPhase.CREATING, log)
                outcome = self._create(mapping, body, log)
            else:
                phase = self._enter(SyncPhase.UPDATING, log)
                outcome = self._update(mapping, remote, body, log)

        except Exception as e:
            failed_phase = (
                SyncPhase.FILE_MISSING
                if isinstance(e, LocalFileNotFoundError)
                else SyncPhase.FAILED
            )
            log.debug(f"Phase {phase.value} -> {failed_phase.value}")

            outcome = PageOutcome(
                status=SyncStatus.FAILED,
                page_id=mapping.page_id,
                title=mapping.default_title,
                file_path=mapping.file,
                error=str(e),
            )
            log.failure(
                f"Error syncing {mapping.file} to Confluence page "
                f"{mapping.page_id}: {e}",
                e,
            )
            raise PageSyncError(outcome) from e

        self._enter(SyncPhase.SUCCEEDED, log)
        log.info(
            f"Successfully synced {mapping.file} to Confluence page "
            f"{outcome.page_id} ({outcome.action.value})"
        )
        return outcome

    def _enter(self, phase: SyncPhase, log: PageLogger) -> SyncPhase:
        log.debug(f"Phase: {phase.value}")
        return phase

    def _read_file(self, mapping: PageMapping, log: PageLogger) -> str:
        """Read the mapping's source file.

        Raises:
            LocalFileNotFoundError: If the resolved path cannot be read
            LocalFileDecodeError: If the file is not valid UTF-8
        """
        path = self.config.resolve_file(mapping)
        log.info(f"Reading file from local filesystem: {path}")
        try:
            return path.read_text(encoding="utf-8")
        except (FileNotFoundError, IsADirectoryError, PermissionError) as e:
            raise LocalFileNotFoundError(mapping.file, str(path)) from e
        except UnicodeDecodeError as e:
            raise LocalFileDecodeError(mapping.file, str(path), e.reason) from e

    def _convert(self, mapping: PageMapping, content: str, log: PageLogger) -> str:
        content_type = ContentType.from_path(mapping.file)
        log.debug(f"Converting {len(content)} chars as {content_type.value}")

        body = convert_to_storage(content, content_type, self.converter_options)
        if self.config.prefix:
            body = self.config.prefix + body
        return body

    def _fetch_remote(
        self, mapping: PageMapping, log: PageLogger
    ) -> Optional[ConfluencePage]:
        """Fetch the target page; None means it must be created."""
        try:
            return self.api.get_page_by_id(mapping.page_id, log=log)
        except PageNotFoundError:
            return None

    def _create(self, mapping: PageMapping, body: str, log: PageLogger) -> PageOutcome:
        title = mapping.default_title

        if not mapping.space_key:
            log.warning(
                f"No spaceKey provided for new page {mapping.page_id}; "
                f"attempting creation anyway"
            )

        if self.dry_run:
            log.info(f"Would create page '{title}' in space {mapping.space_key} (dry run)")
            return self._success(mapping, mapping.page_id, title, SyncAction.WOULD_CREATE)

        created = self.api.create_page(
            title=title,
            space_key=mapping.space_key,
            body=body,
            parent_id=mapping.parent_id,
            log=log,
        )
        return self._success(
            mapping,
            created.page_id or mapping.page_id,
            created.title or title,
            SyncAction.CREATED,
            created.version,
        )

    def _update(
        self,
        mapping: PageMapping,
        remote: ConfluencePage,
        body: str,
        log: PageLogger,
    ) -> PageOutcome:
        title = mapping.title or remote.title

        if self.dry_run:
            return self._preview_update(mapping, remote, title, body, log)

        log.info(f"Updating page against observed version {remote.version}")
        updated = self.api.update_page(
            page_id=remote.page_id or mapping.page_id,
            title=title,
            body=body,
            version=remote.version,
            log=log,
        )
        return self._success(
            mapping,
            updated.page_id or remote.page_id,
            updated.title or title,
            SyncAction.UPDATED,
            updated.version,
        )

    def _preview_update(
        self,
        mapping: PageMapping,
        remote: ConfluencePage,
        title: str,
        body: str,
        log: PageLogger,
    ) -> PageOutcome:
        """Report what an update would do without writing it.

        With force set the content comparison is skipped.
        """
        if self.config.force:
            log.info("Would update page (dry run, comparison skipped by force)")
            return self._success(
                mapping, remote.page_id, title, SyncAction.WOULD_UPDATE, remote.version
            )

        if remote.body == body and remote.title == title:
            log.info("Remote content is already up to date (dry run)")
            return self._success(
                mapping, remote.page_id, title, SyncAction.UNCHANGED, remote.version
            )

        diff = list(difflib.unified_diff(
            remote.body.splitlines(),
            body.splitlines(),
            lineterm="",
        ))
        changed = sum(
            1 for line in diff
            if line[:1] in ("+", "-") and not line.startswith(("+++", "---"))
        )
        log.info(f"Would update page: {changed} changed line(s) (dry run)")
        return self._success(
            mapping, remote.page_id, title, SyncAction.WOULD_UPDATE, remote.version
        )

    def _success(
        self,
        mapping: PageMapping,
        page_id: str,
        title: str,
        action: SyncAction,
        version: Optional[int] = None,
    ) -> PageOutcome:
        return PageOutcome(
            status=SyncStatus.SUCCESS,
            page_id=page_id,
            title=title,
            file_path=mapping.file,
            action=action,
            version=version,
        )
