#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/mdoffice/converters/pptx.py
"""Presentation (PPTX) to and from Markdown.

Import treats the container strictly as a ZIP archive. Slide parts are
located by name (``ppt/slides/slide{N}.xml``), ordered by the number in the
name, and scanned for text with a tolerant substring search rather than an
XML parser. The first non-blank paragraph of a slide becomes its ``#``
heading and every later non-blank paragraph its own Markdown paragraph.

Export splits Markdown on top-level headings (``# `` only, deeper headings
stay in the slide body) and assembles a minimal package from scratch: content
types, root relationships, one slide master, one slide layout, and one part
plus relationship part per slide, all deflate-compressed.

"""

from __future__ import annotations

import io
import logging
import zipfile
from typing import IO
from xml.sax.saxutils import escape

from mdoffice.constants import (
    CT_PRESENTATION,
    CT_RELATIONSHIPS,
    CT_SLIDE,
    CT_SLIDE_LAYOUT,
    CT_SLIDE_MASTER,
    CT_XML,
    NS_CONTENT_TYPES,
    NS_DRAWING,
    NS_PACKAGE_RELATIONSHIPS,
    NS_PRESENTATION,
    NS_RELATIONSHIPS,
    REL_TYPE_OFFICE_DOCUMENT,
    REL_TYPE_SLIDE,
    REL_TYPE_SLIDE_LAYOUT,
    REL_TYPE_SLIDE_MASTER,
    SLIDE_ENTRY_PREFIX,
    SLIDE_ENTRY_SUFFIX,
    SLIDE_LAYOUT_ID,
    SLIDE_MASTER_ID,
    XML_ENTITY_DECODE,
    XML_PARAGRAPH_MARKER,
    XML_TEXT_CLOSE_MARKER,
    XML_TEXT_OPEN_MARKER,
)
from mdoffice.converters.base import BaseConverter
from mdoffice.exceptions import ConversionError
from mdoffice.markdown.events import split_lines
from mdoffice.model import Slide
from mdoffice.options import PptxOptions
from mdoffice.utils.io_utils import Destination, Source, open_destination, read_source_bytes

logger = logging.getLogger(__name__)

_XML_DECLARATION = '<?xml version="1.0" encoding="UTF-8" standalone="yes"?>\n'
_PML_NAMESPACES = f'xmlns:a="{NS_DRAWING}" xmlns:r="{NS_RELATIONSHIPS}" xmlns:p="{NS_PRESENTATION}"'
_EMPTY_TREE = (
    '<p:spTree><p:nvGrpSpPr><p:cNvPr id="1" name=""/><p:cNvGrpSpPr/><p:nvPr/></p:nvGrpSpPr>'
    "<p:grpSpPr/></p:spTree>"
)
_COLOR_MAP = (
    '<p:clrMap bg1="lt1" tx1="dk1" bg2="lt2" tx2="dk2" accent1="accent1" accent2="accent2" '
    'accent3="accent3" accent4="accent4" accent5="accent5" accent6="accent6" hlink="hlink" folHlink="folHlink"/>'
)


def decode_xml_entities(text: str) -> str:
    """Decode the five predefined XML entities."""
    for entity, char in XML_ENTITY_DECODE:
        text = text.replace(entity, char)
    return text


def xml_escape(text: str) -> str:
    """Escape text for element content and attribute values."""
    return escape(text, {'"': "&quot;", "'": "&apos;"})


def slide_index(entry_name: str) -> int:
    """Return the slide number embedded in a slide entry name, or 0 if unparsable."""
    number = entry_name[len(SLIDE_ENTRY_PREFIX) : -len(SLIDE_ENTRY_SUFFIX)]
    try:
        return int(number)
    except ValueError:
        logger.debug("Unparsable slide number in %r; using 0", entry_name)
        return 0


def is_slide_entry(entry_name: str) -> bool:
    """Return True for ``ppt/slides/slide*.xml`` archive entries."""
    return entry_name.startswith(SLIDE_ENTRY_PREFIX) and entry_name.endswith(SLIDE_ENTRY_SUFFIX)


def extract_slide_paragraphs(xml: str) -> list[str]:
    """Scan slide XML for the trimmed, non-blank text of each paragraph.

    The XML is split on paragraph markers, then on text-run markers; each
    run's text is everything up to the next run-closing marker. Entities
    are decoded. Malformed XML degrades to whatever text the scan finds.
    """
    paragraphs: list[str] = []
    for chunk in xml.split(XML_PARAGRAPH_MARKER):
        parts: list[str] = []
        for piece in chunk.split(XML_TEXT_OPEN_MARKER)[1:]:
            end = piece.find(XML_TEXT_CLOSE_MARKER)
            if end != -1:
                parts.append(decode_xml_entities(piece[:end]))
        text = "".join(parts).strip()
        if text:
            paragraphs.append(text)
    return paragraphs


def render_slide(slide: Slide) -> str:
    """Render an imported slide: a ``#`` heading then one paragraph per body line."""
    lines = [f"# {slide.title}", *slide.body]
    return "\n\n".join(lines)


def parse_slides(markdown: str, default_title: str) -> list[Slide]:
    """Split Markdown into slides on top-level headings.

    Only ``# `` lines start a slide; ``##`` and deeper headings are kept as
    body text. Blank lines are dropped. Content before the first heading
    forms an untitled slide. Without any top-level heading the whole
    document is one slide titled ``default_title``.

    Parameters
    ----------
    markdown : str
        Markdown source
    default_title : str
        Title used when the document has no top-level heading

    Returns
    -------
    list of Slide
        Slides in document order; never empty

    """
    slides: list[Slide] = []
    current: Slide | None = None
    preamble: list[str] = []
    has_heading = False

    for line in split_lines(markdown):
        if line.startswith("# "):
            has_heading = True
            if current is not None:
                slides.append(current)
            elif preamble:
                slides.append(Slide(title="", body=preamble))
            current = Slide(title=line[2:].strip())
        elif line.strip():
            (current.body if current is not None else preamble).append(line)

    if not has_heading:
        return [Slide(title=default_title, body=preamble)]
    if current is not None:
        slides.append(current)
    return slides


class PptxConverter(BaseConverter[PptxOptions]):
    """Convert PPTX presentations to and from Markdown.

    Parameters
    ----------
    options : PptxOptions or None, default = None
        Conversion options

    """

    format_name = "pptx"
    options_class = PptxOptions

    # Import -------------------------------------------------------------------

    def to_markdown(self, source: Source) -> str:
        """Convert a PPTX presentation to Markdown.

        Parameters
        ----------
        source : str, Path or bytes
            PPTX file path or raw bytes

        Returns
        -------
        str
            One section per slide that has text, in slide-number order

        Raises
        ------
        ConversionError
            If the file cannot be read or is not a ZIP archive

        """
        slides = self.read_slides(read_source_bytes(source))
        return "\n".join(render_slide(slide) + "\n" for slide in slides)

    def read_slides(self, data: bytes) -> list[Slide]:
        """Extract slides from a PPTX archive, sorted by slide number."""
        try:
            archive = zipfile.ZipFile(io.BytesIO(data))
        except (zipfile.BadZipFile, zipfile.LargeZipFile, ValueError) as e:
            raise ConversionError.wrap("Failed to read PPTX archive", e) from e

        numbered: list[tuple[int, Slide]] = []
        with archive:
            for info in archive.infolist():
                if not is_slide_entry(info.filename):
                    continue
                try:
                    xml = archive.read(info).decode("utf-8", errors="replace")
                except (zipfile.BadZipFile, OSError, RuntimeError, NotImplementedError) as e:
                    raise ConversionError.wrap("Failed to read slide XML", e) from e

                paragraphs = extract_slide_paragraphs(xml)
                if paragraphs:
                    numbered.append((slide_index(info.filename), Slide(title=paragraphs[0], body=paragraphs[1:])))

        numbered.sort(key=lambda item: item[0])
        logger.debug("Read %d slides with text", len(numbered))
        return [slide for _, slide in numbered]

    # Export -------------------------------------------------------------------

    def from_markdown(self, markdown: str, destination: Destination) -> None:
        """Convert Markdown to a PPTX presentation.

        Parameters
        ----------
        markdown : str
            Markdown source
        destination : str, Path or IO[bytes]
            Output file path or binary stream

        Raises
        ------
        ConversionError
            If the destination cannot be created or any archive write fails

        """
        slides = parse_slides(markdown, self.options.default_title)
        logger.debug("Writing %d slides to PPTX", len(slides))
        with open_destination(destination) as stream:
            self.write_package(slides, stream)

    def write_package(self, slides: list[Slide], stream: IO[bytes]) -> None:
        """Write a complete presentation package for ``slides`` to ``stream``."""
        try:
            with zipfile.ZipFile(stream, "w", compression=zipfile.ZIP_DEFLATED) as package:
                for name, content in self._package_parts(slides):
                    package.writestr(name, content)
        except (zipfile.BadZipFile, OSError, ValueError) as e:
            raise ConversionError.wrap("Failed to write PPTX", e) from e

    def _package_parts(self, slides: list[Slide]) -> list[tuple[str, str]]:
        count = len(slides)
        parts = [
            ("[Content_Types].xml", self._content_types(count)),
            ("_rels/.rels", _relationships([("rId1", REL_TYPE_OFFICE_DOCUMENT, "ppt/presentation.xml")])),
            ("ppt/_rels/presentation.xml.rels", self._presentation_rels(count)),
            ("ppt/presentation.xml", self._presentation(count)),
            ("ppt/slideMasters/slideMaster1.xml", _slide_master()),
            (
                "ppt/slideMasters/_rels/slideMaster1.xml.rels",
                _relationships([("rId1", REL_TYPE_SLIDE_LAYOUT, "../slideLayouts/slideLayout1.xml")]),
            ),
            ("ppt/slideLayouts/slideLayout1.xml", _slide_layout()),
            (
                "ppt/slideLayouts/_rels/slideLayout1.xml.rels",
                _relationships([("rId1", REL_TYPE_SLIDE_MASTER, "../slideMasters/slideMaster1.xml")]),
            ),
        ]
        layout_rels = _relationships([("rId1", REL_TYPE_SLIDE_LAYOUT, "../slideLayouts/slideLayout1.xml")])
        for number, slide in enumerate(slides, start=1):
            parts.append((f"ppt/slides/_rels/slide{number}.xml.rels", layout_rels))
            parts.append((f"ppt/slides/slide{number}.xml", self._slide(slide)))
        return parts

    @staticmethod
    def _content_types(count: int) -> str:
        overrides = [
            ("/ppt/presentation.xml", CT_PRESENTATION),
            ("/ppt/slideLayouts/slideLayout1.xml", CT_SLIDE_LAYOUT),
            ("/ppt/slideMasters/slideMaster1.xml", CT_SLIDE_MASTER),
        ]
        overrides.extend((f"/ppt/slides/slide{n}.xml", CT_SLIDE) for n in range(1, count + 1))
        body = "".join(f'<Override PartName="{name}" ContentType="{ct}"/>' for name, ct in overrides)
        return (
            f'{_XML_DECLARATION}<Types xmlns="{NS_CONTENT_TYPES}">'
            f'<Default Extension="rels" ContentType="{CT_RELATIONSHIPS}"/>'
            f'<Default Extension="xml" ContentType="{CT_XML}"/>'
            f"{body}</Types>"
        )

    @staticmethod
    def _presentation_rels(count: int) -> str:
        rels = [("rId1", REL_TYPE_SLIDE_MASTER, "slideMasters/slideMaster1.xml")]
        rels.extend((f"rId{n + 1}", REL_TYPE_SLIDE, f"slides/slide{n}.xml") for n in range(1, count + 1))
        return _relationships(rels)

    def _presentation(self, count: int) -> str:
        base = self.options.slide_id_base
        slide_ids = "".join(f'<p:sldId id="{base + i}" r:id="rId{i + 2}"/>' for i in range(count))
        return (
            f"{_XML_DECLARATION}<p:presentation {_PML_NAMESPACES}>"
            f'<p:sldMasterIdLst><p:sldMasterId id="{SLIDE_MASTER_ID}" r:id="rId1"/></p:sldMasterIdLst>'
            f"<p:sldIdLst>{slide_ids}</p:sldIdLst>"
            f'<p:sldSz cx="{self.options.slide_width}" cy="{self.options.slide_height}"/>'
            f'<p:notesSz cx="{self.options.slide_height}" cy="{self.options.slide_width}"/>'
            "</p:presentation>"
        )

    def _slide(self, slide: Slide) -> str:
        width = self.options.slide_width
        height = self.options.slide_height
        margin_x = width // 20
        title_y = height // 25
        title_h = height // 6
        body_y = height * 7 // 30
        body_h = height * 2 // 3

        frame_width = width - 2 * margin_x

        title = _shape(2, "Title", '<p:ph type="title"/>', (margin_x, title_y, frame_width, title_h), [slide.title])
        body = _shape(3, "Body", '<p:ph idx="1"/>', (margin_x, body_y, frame_width, body_h), slide.body)
        return (
            f"{_XML_DECLARATION}<p:sld {_PML_NAMESPACES}><p:cSld><p:spTree>"
            '<p:nvGrpSpPr><p:cNvPr id="1" name=""/><p:cNvGrpSpPr/><p:nvPr/></p:nvGrpSpPr><p:grpSpPr/>'
            f"{title}{body}</p:spTree></p:cSld></p:sld>"
        )


def _relationships(rels: list[tuple[str, str, str]]) -> str:
    body = "".join(f'<Relationship Id="{rid}" Type="{rtype}" Target="{target}"/>' for rid, rtype, target in rels)
    return f'{_XML_DECLARATION}<Relationships xmlns="{NS_PACKAGE_RELATIONSHIPS}">{body}</Relationships>'


def _slide_master() -> str:
    return (
        f"{_XML_DECLARATION}<p:sldMaster {_PML_NAMESPACES}>"
        f"<p:cSld>{_EMPTY_TREE}</p:cSld>{_COLOR_MAP}"
        f'<p:sldLayoutIdLst><p:sldLayoutId id="{SLIDE_LAYOUT_ID}" r:id="rId1"/></p:sldLayoutIdLst>'
        "<p:txStyles><p:titleStyle/><p:bodyStyle/><p:otherStyle/></p:txStyles>"
        "</p:sldMaster>"
    )


def _slide_layout() -> str:
    return (
        f'{_XML_DECLARATION}<p:sldLayout {_PML_NAMESPACES} type="blank">'
        f'<p:cSld name="Blank">{_EMPTY_TREE}</p:cSld>'
        "</p:sldLayout>"
    )


def _shape(shape_id: int, name: str, placeholder: str, frame: tuple[int, int, int, int], lines: list[str]) -> str:
    """Build a text shape with one paragraph per line."""
    x, y, cx, cy = frame
    paragraphs = "".join(
        f'<a:p><a:r><a:rPr lang="en-US" dirty="0"/><a:t>{xml_escape(line)}</a:t></a:r></a:p>' for line in lines
    ) or "<a:p/>"
    return (
        "<p:sp>"
        f'<p:nvSpPr><p:cNvPr id="{shape_id}" name="{name}"/>'
        f'<p:cNvSpPr><a:spLocks noGrp="1"/></p:cNvSpPr><p:nvPr>{placeholder}</p:nvPr></p:nvSpPr>'
        f'<p:spPr><a:xfrm><a:off x="{x}" y="{y}"/><a:ext cx="{cx}" cy="{cy}"/></a:xfrm></p:spPr>'
        f"<p:txBody><a:bodyPr/><a:lstStyle/>{paragraphs}</p:txBody>"
        "</p:sp>"
    )
