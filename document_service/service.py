"""DSR document service.

Orchestrates the core for its callers (API, Temporal activities, scripts):

    load record → resolve equipment → stamp template → persist → clear flag

Every record mutation made through the service sets the regeneration
flag; a successful render clears it for that one record. The flag is
cleared by a separate store write, so a crash between persist and clear
re-renders the show on the next sweep (at-least-once regeneration).
"""

from pathlib import Path
from typing import List, Optional

from core.config import Settings
from core.errors import DSRError, DuplicateRecord
from core.observability.logging import get_logger, log_stage, with_correlation
from dsr_renderer.layout import DSRLayout, load_layout
from dsr_renderer.renderer import FormRenderer
from equipment_resolver.formatting import format_equipment_list
from equipment_resolver.resolver import EquipmentExpander
from models.equipment import EquipmentCatalogEntry, ParsedEquipmentLine
from models.refs import DocumentReference, RenderOutcome, RenderStatus
from models.show import ShowRecord
from storage.artifacts import FileDocumentStore, FileTemplateStore
from storage.base import CatalogStore, DocumentStore, ShowStore, TemplateStore
from storage.csv_store import CsvCatalogStore, CsvShowStore


logger = get_logger(__name__)

DEFAULT_TEMPLATE_NAME = "dsr_template.pdf"


class DSRService:
    """Entry point for expansion, rendering and regeneration sweeps.

    Stores are injected; nothing is cached between calls, so the catalog
    and template are re-read on every render.

    Example:
        service = build_service(get_settings())
        ref = service.render_show_document("SH1001")
        print(ref.storage_uri)
    """

    def __init__(
        self,
        shows: ShowStore,
        catalog: CatalogStore,
        templates: TemplateStore,
        documents: DocumentStore,
        layout: Optional[DSRLayout] = None,
        template_name: str = DEFAULT_TEMPLATE_NAME,
    ):
        self.shows = shows
        self.catalog = catalog
        self.templates = templates
        self.documents = documents
        self.layout = layout or load_layout()
        self.template_name = template_name
        self.expander = EquipmentExpander(catalog)
        self.renderer = FormRenderer(self.layout)

    # =========================================================================
    # Equipment
    # =========================================================================

    def expand_equipment_list(self, equipment_list: Optional[str]) -> List[ParsedEquipmentLine]:
        """Parse and resolve a raw equipment list.

        Raises:
            CatalogUnavailable: If the catalog cannot be loaded
        """
        return self.expander.expand(equipment_list)

    def list_equipment(self) -> List[EquipmentCatalogEntry]:
        return self.catalog.get_all()

    def equipment_text(self, record: ShowRecord) -> Optional[str]:
        """Text for the DSR equipment block.

        A pre-computed formatted list wins; otherwise the raw list is
        expanded. If expansion yields nothing the raw list is used as is.
        """
        if record.formatted_equipment_list:
            return record.formatted_equipment_list
        if not record.equipment_list:
            return None

        lines = self.expand_equipment_list(record.equipment_list)
        if not lines:
            logger.warning(
                f"No equipment items parsed for show {record.id}; using raw list",
                extra_fields={"equipment_list": record.equipment_list},
            )
            return record.equipment_list
        return format_equipment_list(lines)

    # =========================================================================
    # Rendering
    # =========================================================================

    def render_show_document(self, show_id: str) -> DocumentReference:
        """Render and persist the DSR for one show, then clear its flag.

        Args:
            show_id: Show identifier

        Returns:
            Reference to the written document

        Raises:
            RecordNotFound: If the show does not exist
            CatalogUnavailable: If the equipment catalog cannot be read
            TemplateUnavailable: If the template is missing or unreadable
            PersistFailure: If the document cannot be written
        """
        with with_correlation(show_id=show_id), log_stage(logger, "load"):
            record = self.shows.get(show_id)

        with with_correlation(show_id=show_id, show_name=record.name):
            logger.info(f"Generating DSR for show {show_id}")

            with log_stage(logger, "template"):
                template = self.templates.load(self.template_name)

            with log_stage(logger, "equipment"):
                equipment_text = self.equipment_text(record)

            with log_stage(logger, "render"):
                data = self.renderer.render(template, record, equipment_text)

            with log_stage(logger, "persist"):
                ref = self.documents.save(record, data)

            logger.info(
                f"DSR written to {ref.storage_uri}",
                extra_fields={"size_bytes": ref.size_bytes, "content_hash": ref.content_hash},
            )
            self._clear_flag(show_id)
            return ref

    def _clear_flag(self, show_id: str) -> None:
        try:
            self.shows.set_regeneration_flag(show_id, False)
        except Exception as e:
            # Document is already written; the show is re-rendered next sweep
            logger.error(
                f"Failed to clear regeneration flag for show {show_id}: {e}",
                extra_fields={"error_type": type(e).__name__},
            )

    def pending_show_ids(self) -> List[str]:
        """Ids of shows whose regeneration flag is set, in catalog order."""
        return [r.id for r in self.shows.get_all() if r.needs_regeneration]

    def render_outcome(self, show_id: str) -> RenderOutcome:
        """Render one show, capturing any failure as a FAILED outcome."""
        try:
            ref = self.render_show_document(show_id)
        except DSRError as e:
            logger.error(
                f"DSR generation failed for show {show_id}: {e}",
                extra_fields={"show_id": show_id, "condition": e.condition},
            )
            return RenderOutcome(
                show_id=show_id,
                status=RenderStatus.FAILED,
                condition=e.condition,
                error=str(e),
            )
        except Exception as e:
            logger.exception(
                f"Unexpected error generating DSR for show {show_id}: {e}",
                extra_fields={"show_id": show_id},
            )
            return RenderOutcome(
                show_id=show_id,
                status=RenderStatus.FAILED,
                condition=type(e).__name__,
                error=str(e),
            )

        return RenderOutcome(show_id=show_id, status=RenderStatus.SUCCESS, document=ref)

    def sweep_pending_renders(self) -> List[RenderOutcome]:
        """Render every flagged show.

        One show's failure is logged and reported but never stops the
        sweep; a failed show keeps its flag set.

        Returns:
            One RenderOutcome per flagged show, in catalog order
        """
        pending = [r for r in self.shows.get_all() if r.needs_regeneration]
        logger.info(f"Found {len(pending)} shows needing DSR regeneration")

        outcomes = []
        for record in pending:
            outcome = self.render_outcome(record.id)
            outcome.show_name = record.name
            outcomes.append(outcome)

        rendered = sum(1 for o in outcomes if o.succeeded)
        logger.info(
            f"Regeneration sweep complete: {rendered} rendered, {len(outcomes) - rendered} failed",
            extra_fields={"rendered": rendered, "failed": len(outcomes) - rendered},
        )
        return outcomes

    # =========================================================================
    # Record mutations
    # =========================================================================

    def get_show(self, show_id: str) -> ShowRecord:
        return self.shows.get(show_id)

    def list_shows(self) -> List[ShowRecord]:
        return self.shows.get_all()

    def add_show(self, record: ShowRecord) -> ShowRecord:
        """Append a new show, flagged for regeneration.

        Raises:
            DuplicateRecord: If a show with the same id already exists
        """
        if any(existing.id == record.id for existing in self.shows.get_all()):
            raise DuplicateRecord(f"Show with ID {record.id} already exists")
        return self.shows.save(record.with_regeneration_flag(True))

    def save_show(self, show_id: str, record: ShowRecord) -> ShowRecord:
        """Replace a show wholesale, flagged for regeneration.

        Raises:
            RecordNotFound: If no show with ``show_id`` exists
        """
        self.shows.get(show_id)
        updated = record.model_copy(update={"id": show_id, "needs_regeneration": True})
        return self.shows.save(updated)

    def replace_all_shows(self, records: List[ShowRecord]) -> List[ShowRecord]:
        """Bulk-replace the catalog. Every record is flagged; no diffing.

        Raises:
            DuplicateRecord: If an id appears more than once in ``records``;
                the stored catalog is left untouched
        """
        seen = set()
        duplicates = []
        for record in records:
            if record.id in seen and record.id not in duplicates:
                duplicates.append(record.id)
            seen.add(record.id)
        if duplicates:
            raise DuplicateRecord(f"Duplicate show IDs in bulk replace: {', '.join(duplicates)}")

        flagged = [r.with_regeneration_flag(True) for r in records]
        self.shows.replace_all(flagged)
        logger.info(f"Replaced show catalog with {len(flagged)} records, all flagged for regeneration")
        return flagged


def build_service(settings: Settings) -> DSRService:
    """Wire a DSRService against the flat-file data directory."""
    layout = load_layout(Path(settings.layout_path)) if settings.layout_path else load_layout()
    return DSRService(
        shows=CsvShowStore(settings.shows_csv),
        catalog=CsvCatalogStore(settings.equipment_csv),
        templates=FileTemplateStore(settings.templates_dir),
        documents=FileDocumentStore(settings.shows_dir),
        layout=layout,
        template_name=settings.template_name,
    )
