import io

import pytest
from pypdf import PdfWriter
from pypdf.generic import (
    ArrayObject,
    DecodedStreamObject,
    DictionaryObject,
    FloatObject,
    NameObject,
    NumberObject,
    TextStringObject,
)

from fieldcatalog import SSN_FIELD_CANDIDATES, W4_FIELDS

CHECKBOX_NAMES = ("single", "married", "hoh", "multipleJobs")
TEXT_NAMES = tuple(name for name in W4_FIELDS if name not in CHECKBOX_NAMES)

# The 2026 revision keeps the SSN under Step1a
SSN_FIELD = SSN_FIELD_CANDIDATES[2]


def _rect(i):
    y = 760 - i * 24
    return ArrayObject([FloatObject(50), FloatObject(y), FloatObject(250), FloatObject(y + 18)])


def _appearance(writer, on_state):
    stream = DecodedStreamObject()
    stream.set_data(b"0 g 2 2 14 14 re f" if on_state else b"")
    stream.update({
        NameObject("/Type"): NameObject("/XObject"),
        NameObject("/Subtype"): NameObject("/Form"),
        NameObject("/BBox"): ArrayObject([FloatObject(0), FloatObject(0), FloatObject(18), FloatObject(18)]),
    })
    return writer._add_object(stream)


def _attach(writer, roots, nodes, qualified_name, terminal):
    """Adds a terminal field under its dotted parents, creating them as needed."""
    parts = qualified_name.split(".")
    parent_ref = None
    path = ""
    for part in parts[:-1]:
        path = f"{path}.{part}" if path else part
        if path not in nodes:
            node = DictionaryObject({
                NameObject("/T"): TextStringObject(part),
                NameObject("/Kids"): ArrayObject(),
            })
            if parent_ref is not None:
                node[NameObject("/Parent")] = parent_ref
            ref = writer._add_object(node)
            if parent_ref is not None:
                parent_ref.get_object()["/Kids"].append(ref)
            else:
                roots.append(ref)
            nodes[path] = ref
        parent_ref = nodes[path]

    terminal[NameObject("/T")] = TextStringObject(parts[-1])
    if parent_ref is not None:
        terminal[NameObject("/Parent")] = parent_ref
    ref = writer._add_object(terminal)
    if parent_ref is not None:
        parent_ref.get_object()["/Kids"].append(ref)
    else:
        roots.append(ref)
    return ref


def build_form_pdf(text_fields, checkboxes=(), checkbox_on_state="/Yes"):
    """One-page AcroForm document with the given text fields and checkboxes."""
    writer = PdfWriter()
    page = writer.add_blank_page(width=612, height=792)
    font = writer._add_object(DictionaryObject({
        NameObject("/Type"): NameObject("/Font"),
        NameObject("/Subtype"): NameObject("/Type1"),
        NameObject("/BaseFont"): NameObject("/Helvetica"),
        NameObject("/Encoding"): NameObject("/WinAnsiEncoding"),
    }))

    roots, nodes, annots = ArrayObject(), {}, ArrayObject()
    for i, name in enumerate(text_fields):
        widget = DictionaryObject({
            NameObject("/Type"): NameObject("/Annot"),
            NameObject("/Subtype"): NameObject("/Widget"),
            NameObject("/FT"): NameObject("/Tx"),
            NameObject("/F"): NumberObject(4),
            NameObject("/Rect"): _rect(i),
            NameObject("/DA"): TextStringObject("/Helv 10 Tf 0 g"),
        })
        annots.append(_attach(writer, roots, nodes, name, widget))

    for i, name in enumerate(checkboxes, start=len(text_fields)):
        widget = DictionaryObject({
            NameObject("/Type"): NameObject("/Annot"),
            NameObject("/Subtype"): NameObject("/Widget"),
            NameObject("/FT"): NameObject("/Btn"),
            NameObject("/F"): NumberObject(4),
            NameObject("/Rect"): _rect(i),
            NameObject("/V"): NameObject("/Off"),
            NameObject("/AS"): NameObject("/Off"),
            NameObject("/AP"): DictionaryObject({
                NameObject("/N"): DictionaryObject({
                    NameObject(checkbox_on_state): _appearance(writer, True),
                    NameObject("/Off"): _appearance(writer, False),
                }),
            }),
        })
        annots.append(_attach(writer, roots, nodes, name, widget))

    page[NameObject("/Annots")] = annots
    writer.root_object[NameObject("/AcroForm")] = writer._add_object(DictionaryObject({
        NameObject("/Fields"): roots,
        NameObject("/DA"): TextStringObject("/Helv 10 Tf 0 g"),
        NameObject("/DR"): DictionaryObject({
            NameObject("/Font"): DictionaryObject({NameObject("/Helv"): font}),
        }),
    }))

    buffer = io.BytesIO()
    writer.write(buffer)
    return buffer.getvalue()


@pytest.fixture
def w4_pdf():
    text_fields = [W4_FIELDS[name] for name in TEXT_NAMES] + [SSN_FIELD]
    checkboxes = [W4_FIELDS[name] for name in CHECKBOX_NAMES]
    return build_form_pdf(text_fields, checkboxes)


@pytest.fixture
def form_pdf_factory():
    return build_form_pdf
