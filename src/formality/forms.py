"""Submitted form data — URL-encoded and multipart.

``parse_form_data()`` turns a request body into ``FormData``, the
mapping ``process_form()`` routes to registered field handlers. Bound
fields submit under their token, so the token is the form key.

URL-encoded bodies use stdlib ``urllib.parse``; multipart bodies (file
uploads) use ``python-multipart``.
"""

from collections.abc import Iterator, Mapping
from dataclasses import dataclass, field
from pathlib import Path
from urllib.parse import parse_qs

from python_multipart.multipart import MultipartParser, parse_options_header


@dataclass(frozen=True, slots=True)
class UploadFile:
    """An uploaded file from a multipart form submission.

    The content is held in memory as bytes.
    """

    filename: str
    content_type: str
    size: int
    content: bytes = field(repr=False)

    def read(self) -> bytes:
        return self.content

    def save(self, path: Path) -> None:
        """Write the content to *path*. Parent directories must exist."""
        path.write_bytes(self.content)


class FormData(Mapping[str, str]):
    """Immutable parsed form data.

    ``form[key]`` is the first value for a key, ``get_list`` all of them.
    Uploaded files are under ``files``.
    """

    __slots__ = ("_data", "_files")

    def __init__(
        self,
        data: dict[str, list[str]],
        files: dict[str, UploadFile] | None = None,
    ) -> None:
        self._data = data
        self._files = files or {}

    @property
    def files(self) -> Mapping[str, UploadFile]:
        return self._files

    def __getitem__(self, key: str) -> str:
        return self._data[key][0]

    def __iter__(self) -> Iterator[str]:
        return iter(self._data)

    def __len__(self) -> int:
        return len(self._data)

    def __repr__(self) -> str:
        items = ", ".join(f"{k!r}: {self[k]!r}" for k in self)
        return f"FormData({{{items}}})"

    def get_list(self, key: str) -> list[str]:
        """Return all values for *key* (checkboxes, multi-selects)."""
        return list(self._data.get(key, []))


def parse_form_data(body: bytes, content_type: str) -> FormData:
    """Parse a form body.

    Raises ``ValueError`` for content types other than
    ``application/x-www-form-urlencoded`` and ``multipart/form-data``, and
    for multipart bodies without a boundary.
    """
    media_type = content_type.lower().split(";")[0].strip()

    if media_type == "application/x-www-form-urlencoded":
        return FormData(parse_qs(body.decode("utf-8"), keep_blank_values=True))

    if media_type == "multipart/form-data":
        return _parse_multipart(body, content_type)

    msg = f"Unsupported form content type: {content_type!r}"
    raise ValueError(msg)


@dataclass(slots=True)
class _Part:
    headers: dict[str, str] = field(default_factory=dict)
    header_name: bytearray = field(default_factory=bytearray)
    header_value: bytearray = field(default_factory=bytearray)
    body: bytearray = field(default_factory=bytearray)
    name: str | None = None
    filename: str | None = None


def _parse_multipart(body: bytes, content_type: str) -> FormData:
    _, options = parse_options_header(content_type)
    boundary = options.get(b"boundary")
    if not boundary:
        msg = "Multipart form data missing boundary parameter"
        raise ValueError(msg)

    data: dict[str, list[str]] = {}
    files: dict[str, UploadFile] = {}
    part = _Part()

    def on_part_begin() -> None:
        nonlocal part
        part = _Part()

    def on_header_field(chunk: bytes, start: int, end: int) -> None:
        part.header_name.extend(chunk[start:end])

    def on_header_value(chunk: bytes, start: int, end: int) -> None:
        part.header_value.extend(chunk[start:end])

    def on_header_end() -> None:
        name = part.header_name.decode("latin-1").lower()
        value = part.header_value.decode("latin-1")
        part.headers[name] = value
        part.header_name.clear()
        part.header_value.clear()
        if name == "content-disposition":
            _, params = parse_options_header(value)
            if b"name" in params:
                part.name = params[b"name"].decode("utf-8")
            if b"filename" in params:
                part.filename = params[b"filename"].decode("utf-8")

    def on_part_data(chunk: bytes, start: int, end: int) -> None:
        part.body.extend(chunk[start:end])

    def on_part_end() -> None:
        if part.name is None:
            return
        if part.filename is None:
            data.setdefault(part.name, []).append(part.body.decode("utf-8", errors="replace"))
            return
        content = bytes(part.body)
        files[part.name] = UploadFile(
            filename=part.filename,
            content_type=part.headers.get("content-type", "application/octet-stream"),
            size=len(content),
            content=content,
        )

    parser = MultipartParser(
        boundary,
        {
            "on_part_begin": on_part_begin,
            "on_header_field": on_header_field,
            "on_header_value": on_header_value,
            "on_header_end": on_header_end,
            "on_part_data": on_part_data,
            "on_part_end": on_part_end,
        },
    )
    parser.write(body)
    parser.finalize()
    return FormData(data, files)
