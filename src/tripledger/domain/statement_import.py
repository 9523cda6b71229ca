"""Bank statement import service.

An import runs as a sequence of stages over an explicit ``ImportSession``:
load, map columns, check duplicates, persist, and detect trips. Each stage
takes a session and returns a new one, so a caller can stop after any stage
(for example to let the user fix the column mapping) and resume later.
"""

from dataclasses import dataclass, field, replace
import logging
from pathlib import Path
from typing import Callable, Optional

from tripledger.database.base import Database
from tripledger.domain.bank_formats import detect_bank_format
from tripledger.domain.chunked_import import DEFAULT_BATCH_SIZE, ChunkedImporter
from tripledger.domain.deduplication import DuplicateService
from tripledger.domain.entities import (
    BuildResult,
    ColumnMapping,
    DetectedFormat,
    DetectedTrip,
    ImportResult,
    ImportSummary,
    TransactionCandidate,
)
from tripledger.domain.errors import ValidationError
from tripledger.domain.transaction_builder import build_candidates
from tripledger.domain.trip_detection import detect_trips
from tripledger.utils.tokenizer import ParsedTable, tokenize

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ImportSession:
    """State of one statement import, from raw file to stored transactions."""

    user_id: int
    filename: str
    table: ParsedTable
    detected: Optional[DetectedFormat] = None
    mapping: Optional[ColumnMapping] = None
    build: Optional[BuildResult] = None
    duplicate_flags: tuple[bool, ...] = ()
    skip_duplicates: bool = True
    result: Optional[ImportResult] = None
    trips: tuple[DetectedTrip, ...] = field(default=())

    @property
    def bank_name(self) -> Optional[str]:
        return self.detected.bank_name if self.detected else None

    @property
    def candidates(self) -> tuple[TransactionCandidate, ...]:
        return self.build.candidates if self.build else ()

    @property
    def needs_mapping(self) -> bool:
        """True when no usable mapping produced candidates yet."""
        return self.mapping is None or not self.mapping.is_complete or not self.candidates

    @property
    def duplicate_count(self) -> int:
        return sum(self.duplicate_flags)

    @property
    def to_import(self) -> tuple[TransactionCandidate, ...]:
        """Candidates that will be written, honouring ``skip_duplicates``."""
        if not self.skip_duplicates or not self.duplicate_flags:
            return self.candidates
        return tuple(c for c, dup in zip(self.candidates, self.duplicate_flags) if not dup)

    def summary(self) -> ImportSummary:
        """Counts for the user once the session has run."""
        return ImportSummary(
            total_rows=self.table.total_rows,
            valid=len(self.candidates),
            duplicates=self.duplicate_count,
            imported=self.result.success if self.result else 0,
            failed=self.result.failed_count if self.result else 0,
        )


class StatementImportService:
    """Service for importing bank statement exports."""

    def __init__(self, db: Database, batch_size: int = DEFAULT_BATCH_SIZE):
        """Initialize statement import service.

        Args:
            db: Database instance
            batch_size: Rows per insert when persisting
        """
        self.db = db
        self.duplicate_service = DuplicateService(db)
        self.importer = ChunkedImporter(db, batch_size=batch_size)

    def load(self, user_id: int, text: str, filename: str) -> ImportSession:
        """Tokenize a statement and detect its bank format.

        Raises:
            ValidationError: If the text cannot be read as a statement
        """
        try:
            table = tokenize(text)
        except ValueError as e:
            raise ValidationError(str(e)) from e

        detected = detect_bank_format(table.headers)
        logger.info("Loaded %s: %d data rows", filename, len(table.rows))
        return ImportSession(
            user_id=user_id,
            filename=filename,
            table=table,
            detected=detected,
            mapping=detected.mapping if detected else None,
        )

    def load_file(self, user_id: int, path: str) -> ImportSession:
        """Read a statement file from disk and load it.

        Raises:
            FileNotFoundError: If the file doesn't exist
            ValidationError: If the file cannot be read as a statement
        """
        csv_path = Path(path)
        if not csv_path.exists():
            raise FileNotFoundError(f"CSV file not found: {path}")
        text = csv_path.read_text(encoding="utf-8-sig")
        return self.load(user_id, text, csv_path.name)

    def map_columns(
        self, session: ImportSession, mapping: Optional[ColumnMapping] = None
    ) -> ImportSession:
        """Build candidates with the given or detected mapping.

        An incomplete or missing mapping yields no candidates; check
        ``session.needs_mapping`` and ask for columns.

        Raises:
            ValidationError: If the mapping names columns the file lacks
        """
        mapping = mapping or session.mapping
        if mapping is None:
            return replace(session, build=BuildResult(candidates=(), total_rows=len(session.table.rows)))
        build = build_candidates(session.table.rows, session.table.headers, mapping)
        logger.info("%s: %s", session.filename, build.summary())
        return replace(session, mapping=mapping, build=build)

    def check_duplicates(self, session: ImportSession, skip_duplicates: bool = True) -> ImportSession:
        """Flag candidates already stored for the session's user."""
        flags = self.duplicate_service.flag_duplicates(session.user_id, session.candidates)
        return replace(session, duplicate_flags=tuple(flags), skip_duplicates=skip_duplicates)

    def persist(
        self,
        session: ImportSession,
        account_id: Optional[int] = None,
        progress: Optional[Callable[[int], None]] = None,
    ) -> ImportSession:
        """Store the session's candidates in batches."""
        result = self.importer.import_candidates(
            user_id=session.user_id,
            candidates=session.to_import,
            filename=session.filename,
            account_id=account_id,
            progress=progress,
        )
        return replace(session, result=result)

    def detect_trips(self, session: ImportSession, base_location: Optional[str]) -> ImportSession:
        """Detect trips among the transactions this session stored."""
        stored = session.result.transactions if session.result else ()
        return replace(session, trips=tuple(detect_trips(stored, base_location)))

    def run(
        self,
        user_id: int,
        text: str,
        filename: str,
        mapping: Optional[ColumnMapping] = None,
        skip_duplicates: bool = True,
        account_id: Optional[int] = None,
        progress: Optional[Callable[[int], None]] = None,
        base_location: Optional[str] = None,
    ) -> ImportSession:
        """Run every stage, ending with trip detection over the stored rows.

        Nothing is written when no candidates could be built; the returned
        session then has ``needs_mapping`` set.

        Args:
            user_id: Owner of the import
            text: Statement file content
            filename: Name recorded on the import batch
            mapping: Column mapping overriding detection
            skip_duplicates: Leave out candidates already stored
            account_id: Optional account for the new transactions
            progress: Called with percentage of rows persisted after each batch
            base_location: Canonical town the business is based in; spend
                there or in its county never forms a trip

        Returns:
            Final session; ``session.summary()`` has the counts and
            ``session.trips`` the trips found in this import
        """
        session = self.map_columns(self.load(user_id, text, filename), mapping)
        if session.needs_mapping:
            logger.info("%s: no usable column mapping, nothing imported", filename)
            return session
        session = self.check_duplicates(session, skip_duplicates=skip_duplicates)
        session = self.persist(session, account_id=account_id, progress=progress)
        return self.detect_trips(session, base_location)
