"""Language definitions and the registry the highlighter reads them from."""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Dict, Iterable, Iterator, Optional

from voider.runtime.telemetry import span

PLAIN_TEXT = "text"


def _normalize_words(words: Iterable[str]) -> frozenset[str]:
    return frozenset(word.strip() for word in words if word.strip())


def _normalize_extension(extension: str) -> str:
    cleaned = extension.strip().lower()
    if not cleaned:
        raise ValueError("extension cannot be empty")
    return cleaned if cleaned.startswith(".") else f".{cleaned}"


@dataclass(frozen=True, slots=True)
class LanguageSpec:
    """Lexical vocabulary for one language."""

    name: str
    extensions: tuple[str, ...] = ()
    primary_keywords: frozenset[str] = frozenset()
    secondary_keywords: frozenset[str] = frozenset()
    line_comment: Optional[str] = None
    block_comment: Optional[tuple[str, str]] = None
    string_delimiters: frozenset[str] = frozenset()
    multiline_string_delimiters: frozenset[str] = frozenset()
    character_delimiter: Optional[str] = None
    highlight_numbers: bool = True

    def __post_init__(self) -> None:
        if not self.name:
            raise ValueError("language name cannot be empty")
        object.__setattr__(
            self,
            "extensions",
            tuple(dict.fromkeys(_normalize_extension(ext) for ext in self.extensions)),
        )
        object.__setattr__(
            self, "primary_keywords", _normalize_words(self.primary_keywords)
        )
        object.__setattr__(
            self, "secondary_keywords", _normalize_words(self.secondary_keywords)
        )
        object.__setattr__(self, "string_delimiters", frozenset(self.string_delimiters))
        object.__setattr__(
            self,
            "multiline_string_delimiters",
            frozenset(self.multiline_string_delimiters),
        )
        for quote in self.string_delimiters:
            if len(quote) != 1:
                raise ValueError(f"string delimiter {quote!r} must be one character")
        if not self.multiline_string_delimiters <= self.string_delimiters:
            raise ValueError("multi-line delimiters must also be string delimiters")
        if self.character_delimiter is not None and len(self.character_delimiter) != 1:
            raise ValueError("character delimiter must be one character")
        if self.character_delimiter in self.string_delimiters:
            raise ValueError("character delimiter cannot also delimit strings")
        if self.line_comment == "":
            raise ValueError("line comment token cannot be empty")
        if self.block_comment is not None:
            start, end = self.block_comment
            if not start or not end:
                raise ValueError("block comment tokens cannot be empty")

    def allows_multiline(self, quote: str) -> bool:
        return quote in self.multiline_string_delimiters


class LanguageRegistry:
    """Maps language tags and file extensions to ``LanguageSpec`` entries.

    Built once at startup and handed to documents by reference; the
    highlighter never consults module-level tables.
    """

    def __init__(self, *, fallback: Optional[LanguageSpec] = None) -> None:
        self._languages: Dict[str, LanguageSpec] = {}
        self._by_extension: Dict[str, str] = {}
        self._fallback = fallback or LanguageSpec(name=PLAIN_TEXT)

    @property
    def fallback(self) -> LanguageSpec:
        return self._fallback

    def register(self, language: LanguageSpec, *, replace: bool = False) -> LanguageSpec:
        with span(
            "languages::register",
            component="syntax",
            metadata={"language": language.name},
        ):
            if not replace and language.name in self._languages:
                raise ValueError(f"Language '{language.name}' already registered")
            previous = self._languages.get(language.name)
            if previous is not None:
                for extension in previous.extensions:
                    self._by_extension.pop(extension, None)
            for extension in language.extensions:
                owner = self._by_extension.get(extension)
                if owner is not None and owner != language.name and not replace:
                    raise ValueError(
                        f"Extension '{extension}' already claimed by '{owner}'"
                    )
                self._by_extension[extension] = language.name
            self._languages[language.name] = language
            return language

    def get(self, name: str) -> LanguageSpec:
        if name == self._fallback.name:
            return self._languages.get(name, self._fallback)
        try:
            return self._languages[name]
        except KeyError as exc:
            raise KeyError(f"Language '{name}' is not registered") from exc

    def for_path(self, path: Optional[str | os.PathLike[str]]) -> LanguageSpec:
        """Detect the language from ``path``'s extension, or the fallback."""

        if path is None:
            return self._fallback
        _, extension = os.path.splitext(os.fspath(path))
        name = self._by_extension.get(extension.lower())
        if name is None:
            return self._fallback
        return self.get(name)

    def __iter__(self) -> Iterator[LanguageSpec]:
        return iter(self._languages.values())

    def __len__(self) -> int:
        return len(self._languages)

    def __contains__(self, name: object) -> bool:
        return name in self._languages


RUST = LanguageSpec(
    name="rust",
    extensions=(".rs",),
    primary_keywords=(
        "as break const continue crate else enum extern fn for if impl in let "
        "loop match mod move mut pub ref return self Self static struct super "
        "trait type unsafe use where while dyn abstract become box do final "
        "macro override priv typeof unsized virtual yield async await try"
    ).split(),
    secondary_keywords=(
        "bool char i8 i16 i32 i64 i128 isize u8 u16 u32 u64 u128 usize f32 f64 "
        "str String Vec Option Result Some None Ok Err true false"
    ).split(),
    line_comment="//",
    block_comment=("/*", "*/"),
    string_delimiters=frozenset('"'),
    multiline_string_delimiters=frozenset('"'),
    character_delimiter="'",
)

C = LanguageSpec(
    name="c",
    extensions=(".c", ".h", ".cpp", ".hpp", ".cc"),
    primary_keywords=(
        "switch if while for break continue return else struct union typedef "
        "static enum class case default do goto sizeof const volatile extern "
        "register inline"
    ).split(),
    secondary_keywords=(
        "int long double float char unsigned signed void short auto bool size_t"
    ).split(),
    line_comment="//",
    block_comment=("/*", "*/"),
    string_delimiters=frozenset('"'),
    character_delimiter="'",
)

PYTHON = LanguageSpec(
    name="python",
    extensions=(".py", ".pyi"),
    primary_keywords=(
        "and as assert async await break class continue def del elif else "
        "except finally for from global if import in is lambda nonlocal not or "
        "pass raise return try while with yield match case"
    ).split(),
    secondary_keywords=(
        "True False None self cls int float str bytes bool list dict set tuple "
        "object type"
    ).split(),
    line_comment="#",
    string_delimiters=frozenset("\"'"),
)

JAVASCRIPT = LanguageSpec(
    name="javascript",
    extensions=(".js", ".mjs", ".cjs", ".ts"),
    primary_keywords=(
        "break case catch class const continue debugger default delete do else "
        "export extends finally for function if import in instanceof let new "
        "return super switch this throw try typeof var void while with yield "
        "async await of"
    ).split(),
    secondary_keywords=(
        "true false null undefined NaN Infinity number string boolean object any"
    ).split(),
    line_comment="//",
    block_comment=("/*", "*/"),
    string_delimiters=frozenset("\"'`"),
    multiline_string_delimiters=frozenset("`"),
)

DEFAULT_LANGUAGES: tuple[LanguageSpec, ...] = (RUST, C, PYTHON, JAVASCRIPT)


def load_default_languages(registry: LanguageRegistry) -> LanguageRegistry:
    for language in DEFAULT_LANGUAGES:
        registry.register(language, replace=True)
    return registry


def default_registry() -> LanguageRegistry:
    """Return a fresh registry seeded with the built-in languages."""

    return load_default_languages(LanguageRegistry())


__all__ = [
    "LanguageSpec",
    "LanguageRegistry",
    "PLAIN_TEXT",
    "RUST",
    "C",
    "PYTHON",
    "JAVASCRIPT",
    "DEFAULT_LANGUAGES",
    "load_default_languages",
    "default_registry",
]
