"""File-type classification of module ids, used for icons and filters."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class FileType:
    """A display category for a module."""

    name: str
    description: str


UNKNOWN = FileType("unknown", "Unknown")

# Longest suffixes first: ".d.ts" must win over ".ts"
_SUFFIX_TYPES: list[tuple[str, FileType]] = [
    (".d.ts", FileType("dts", "TypeScript Declaration")),
    (".tsx", FileType("tsx", "TSX")),
    (".ts", FileType("ts", "TypeScript")),
    (".mts", FileType("ts", "TypeScript")),
    (".cts", FileType("ts", "TypeScript")),
    (".jsx", FileType("jsx", "JSX")),
    (".js", FileType("js", "JavaScript")),
    (".mjs", FileType("js", "JavaScript")),
    (".cjs", FileType("js", "JavaScript")),
    (".vue", FileType("vue", "Vue")),
    (".svelte", FileType("svelte", "Svelte")),
    (".astro", FileType("astro", "Astro")),
    (".json", FileType("json", "JSON")),
    (".css", FileType("css", "CSS")),
    (".scss", FileType("scss", "SCSS")),
    (".sass", FileType("scss", "SCSS")),
    (".less", FileType("less", "Less")),
    (".styl", FileType("stylus", "Stylus")),
    (".html", FileType("html", "HTML")),
    (".md", FileType("markdown", "Markdown")),
    (".wasm", FileType("wasm", "WebAssembly")),
    (".svg", FileType("svg", "SVG")),
    (".png", FileType("image", "Image")),
    (".jpg", FileType("image", "Image")),
    (".jpeg", FileType("image", "Image")),
    (".gif", FileType("image", "Image")),
    (".webp", FileType("image", "Image")),
    (".avif", FileType("image", "Image")),
    (".ico", FileType("image", "Image")),
    (".woff", FileType("font", "Font")),
    (".woff2", FileType("font", "Font")),
    (".ttf", FileType("font", "Font")),
    (".otf", FileType("font", "Font")),
]


def get_file_type_from_name(name: str) -> FileType:
    """
    Classify a module id by its file suffix.

    Query strings and hashes ("App.vue?vue&type=style") are ignored;
    matching is case-insensitive.
    """
    path = name.split("?", 1)[0].split("#", 1)[0].lower()
    for suffix, file_type in _SUFFIX_TYPES:
        if path.endswith(suffix):
            return file_type
    return UNKNOWN


__all__ = ["FileType", "UNKNOWN", "get_file_type_from_name"]
