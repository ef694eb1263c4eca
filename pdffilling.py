import io
import logging
from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Optional

from pypdf import PdfReader, PdfWriter
from pypdf.generic import ArrayObject, DictionaryObject, NameObject

from formpopulator import AssignmentKind, FieldAssignment, compute_assignments
from schemas import CalcResults, UserData

logger = logging.getLogger(__name__)


class FormFieldError(LookupError):
    """The document has no field of the expected name and type."""


@dataclass
class FillReport:
    applied: List[FieldAssignment] = field(default_factory=list)
    skipped: List[FieldAssignment] = field(default_factory=list)


def _qualified_name(obj: DictionaryObject) -> str:
    parts = []
    while obj is not None:
        if "/T" in obj:
            parts.append(str(obj["/T"]))
        obj = obj["/Parent"] if "/Parent" in obj else None
    return ".".join(reversed(parts))


def _index_widgets(writer: PdfWriter) -> Dict[str, DictionaryObject]:
    """Widget annotations keyed by the fully qualified name of their field."""
    widgets: Dict[str, DictionaryObject] = {}
    for page in writer.pages:
        if "/Annots" not in page:
            continue
        for annot in page["/Annots"]:
            annot = annot.get_object()
            if annot.get("/Subtype") != "/Widget":
                continue
            widgets.setdefault(_qualified_name(annot), annot)
    return widgets


def _checkbox_on_state(widget: Optional[DictionaryObject]) -> str:
    # Checkboxes name their "on" appearance freely (/Yes, /1, /On ...)
    if widget is None or "/AP" not in widget or "/N" not in widget["/AP"]:
        return "/Yes"
    for state in widget["/AP"]["/N"].keys():
        if state != "/Off":
            return str(state)
    return "/Yes"


class PdfFormHandle:
    """
    Mutable view of a PdfWriter's AcroForm. Values are collected with
    `set_text` / `check` and written to the document by `commit`.
    """

    def __init__(self, writer: PdfWriter):
        self.writer = writer
        self.fields = writer.get_fields() or {}
        self.widgets = _index_widgets(writer)
        self.values: Dict[str, str] = {}

    def _field_type(self, identifier: str) -> Optional[str]:
        found = self.fields.get(identifier)
        return found.get("/FT") if found is not None else None

    def has_readable_text_field(self, identifier: str) -> bool:
        return self._field_type(identifier) == "/Tx"

    def set_text(self, identifier: str, value: Optional[str]) -> None:
        if not self.has_readable_text_field(identifier):
            raise FormFieldError(f"No text field named {identifier}")
        self.values[identifier] = value or ""

    def check(self, identifier: str) -> None:
        if self._field_type(identifier) != "/Btn":
            raise FormFieldError(f"No checkbox named {identifier}")
        self.values[identifier] = _checkbox_on_state(self.widgets.get(identifier))

    def commit(self, flatten: bool = True) -> None:
        root = self.writer.root_object
        if self.values:
            for page in self.writer.pages:
                if page.get("/Annots"):
                    self.writer.update_page_form_field_values(
                        page, self.values, auto_regenerate=False, flatten=flatten
                    )
            # IRS forms also carry an XFA copy that viewers would show instead
            if "/AcroForm" in root and "/XFA" in root["/AcroForm"]:
                del root["/AcroForm"]["/XFA"]

        if flatten:
            self.writer.remove_annotations(subtypes="/Widget")
            if "/AcroForm" in root:
                root["/AcroForm"][NameObject("/Fields")] = ArrayObject()


def apply_assignments(form: PdfFormHandle, assignments: Iterable[FieldAssignment]) -> FillReport:
    """
    Applies assignments in order. A field missing from this revision of the
    form is skipped and the rest are still applied.
    """
    report = FillReport()
    for assignment in assignments:
        try:
            if assignment.kind is AssignmentKind.CHECK:
                form.check(assignment.target_field)
            else:
                form.set_text(assignment.target_field, assignment.value)
        except FormFieldError as e:
            logger.debug("Skipping field: %s", e)
            report.skipped.append(assignment)
            continue
        report.applied.append(assignment)
    return report


def fill_w4_pdf(input_pdf: bytes, user: UserData, calc: CalcResults, flatten: bool = True) -> bytes:
    """
    Fills a blank Form W-4 with the user's answers and returns the resulting
    PDF as an in-memory byte object. The form is flattened unless told otherwise.
    """
    reader = PdfReader(io.BytesIO(input_pdf), strict=False)
    writer = PdfWriter(clone_from=reader)

    form = PdfFormHandle(writer)
    report = apply_assignments(form, compute_assignments(user, calc, form))
    form.commit(flatten=flatten)
    logger.info(
        "Filled W-4: %d fields set, %d not found", len(report.applied), len(report.skipped)
    )

    pdf_bytes_io = io.BytesIO()
    writer.write(pdf_bytes_io)
    pdf_bytes_io.seek(0)
    return pdf_bytes_io.getvalue()
