"""Read-only validation of a sync configuration against the remote."""

import logging
from typing import List

from src.confluence_client.api_wrapper import APIWrapper
from src.confluence_client.errors import (
    PageNotFoundError,
    RemoteRequestFailed,
    SpaceNotFoundError,
)
from src.sync_config.models import PageMapping, SyncConfiguration

from .models import PageCheck
from .page_logger import PageLogger

logger = logging.getLogger(__name__)


class ConnectionValidator:
    """Checks every page mapping without writing anything.

    For each mapping the local file must be readable. The remote page is
    looked up; when it does not exist the mapping will create it, so its
    space is checked as well. Rejected credentials and an unreachable
    remote affect every page alike and are raised instead of recorded.
    """

    def __init__(self, config: SyncConfiguration, api: APIWrapper):
        self.config = config
        self.api = api

    def validate(self) -> List[PageCheck]:
        logger.info(f"Validating {len(self.config.pages)} page mapping(s)")
        checks = [self._check_page(mapping) for mapping in self.config.pages]

        failed = sum(1 for check in checks if not check.ok)
        logger.info(
            f"Validation complete: {len(checks) - failed} ok, {failed} with errors"
        )
        return checks

    def _check_page(self, mapping: PageMapping) -> PageCheck:
        log = PageLogger(logger, mapping.page_id)
        check = PageCheck(page_id=mapping.page_id, file_path=mapping.file)

        path = self.config.resolve_file(mapping)
        if path.is_file():
            check.local_size = path.stat().st_size
            log.debug(f"Local file {path} ({check.local_size} bytes)")
        else:
            check.warnings.append(f"File {mapping.file} not found at {path}")

        try:
            page = self.api.get_page_by_id(mapping.page_id, log=log)
            check.remote_found = True
            check.remote_title = page.title
        except PageNotFoundError:
            self._check_new_page(mapping, check, log)
        except RemoteRequestFailed as e:
            check.error = str(e)
            log.error(f"Validation failed: {e}")

        return check

    def _check_new_page(
        self, mapping: PageMapping, check: PageCheck, log: PageLogger
    ) -> None:
        log.info("Page does not exist and will be created")
        if not mapping.space_key:
            check.warnings.append(
                f"Page {mapping.page_id} does not exist and no spaceKey is set"
            )
            return

        try:
            self.api.get_space(mapping.space_key, log=log)
        except SpaceNotFoundError as e:
            check.error = str(e)
            log.error(f"Page cannot be created: {e}")
        except RemoteRequestFailed as e:
            check.error = str(e)
            log.error(f"Validation failed: {e}")
