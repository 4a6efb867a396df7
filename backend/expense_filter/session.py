"""
In-memory state for one user's upload and category filter.

A FilterSession owns the current TableModel and FilterSet. A new upload
always discards the previous table and filter, whether or not it succeeds.
"""
import logging
from typing import Optional, Tuple

from .config import Settings
from .csv_validator import check_file_type, decode_upload, ingest
from .errors import IngestionError, NoDataError
from .export import encode, export_filename
from .filters import EMPTY_FILTER, filtered_rows, summarize, toggle
from .models import FilterSet, FilterSummary, SessionStatus, TableModel

logger = logging.getLogger(__name__)


class FilterSession:
    def __init__(self, settings: Settings):
        self.settings = settings
        self.model: Optional[TableModel] = None
        self.filter_set: FilterSet = EMPTY_FILTER
        self.file_name = ""
        self.error = ""

    def _require_model(self) -> TableModel:
        if self.model is None:
            raise NoDataError()
        return self.model

    def upload(self, contents: bytes, file_name: str) -> FilterSummary:
        """
        Replace the current table with a newly uploaded file.

        Raises:
            IngestionError: If the file is rejected; the session is left empty
                with the error message recorded
        """
        self.file_name = file_name or ""
        self.model = None
        self.filter_set = EMPTY_FILTER
        try:
            check_file_type(self.file_name)
            self.model = ingest(decode_upload(contents), self.settings)
        except IngestionError as exc:
            self.error = exc.message
            raise
        self.error = ""
        return self.view()

    def toggle(self, category: str) -> FilterSummary:
        self._require_model()
        self.filter_set = toggle(self.filter_set, category)
        logger.debug("Filter is now %s", sorted(self.filter_set))
        return self.view()

    def reset(self) -> FilterSummary:
        self._require_model()
        self.filter_set = EMPTY_FILTER
        return self.view()

    def view(self) -> FilterSummary:
        return summarize(self._require_model(), self.filter_set, self.settings)

    def export(self) -> Tuple[str, str]:
        """Return the filtered rows as CSV text with a suggested file name."""
        model = self._require_model()
        rows = filtered_rows(model, self.filter_set)
        logger.info("Exporting %d of %d rows", len(rows), len(model.rows))
        return encode(model.headers, rows), export_filename(self.file_name)

    def status(self) -> SessionStatus:
        return SessionStatus(
            file_name=self.file_name, error=self.error, loaded=self.model is not None
        )
