"""
A single line of a using block.

Each line of a using region is parsed into a ``UsingStatement``: a using
directive (plain, static or alias), a comment, a preprocessor directive or
a blank line. Classification is purely by shape; no C# grammar is involved.
"""

import re
from dataclasses import dataclass, field
from typing import List, Optional


# global? using static? (Alias =)? Target;
# Every repetition is bounded by a literal, so matching stays linear.
USING_DIRECTIVE_RE = re.compile(
    r'^(global\s+)?using\s+(static\s+)?(?:(\w+)\s*=\s*)?([^;]*);'
)
_NEW_INITIALIZER_RE = re.compile(r'=\s*new\b')


def is_using_directive(line: str) -> bool:
    """Check whether a line has the shape of a using directive.

    Rejects the statement forms of the keyword: ``using (var x = ...)``,
    ``using var x = new Foo();`` and anything else whose target is not a
    plain name.
    """
    trimmed = line.strip()
    match = USING_DIRECTIVE_RE.match(trimmed)
    if not match:
        return False

    target = match.group(4).strip()
    if not target or '(' in target:
        return False
    if _NEW_INITIALIZER_RE.search(trimmed):
        return False
    # Non-alias targets are dotted names; whitespace means a declaration
    if match.group(3) is None and any(c.isspace() for c in target):
        return False
    return True


def is_comment_line(trimmed: str) -> bool:
    """Line comment, block comment opener, or the closing line of a block comment."""
    if trimmed.startswith('//') or trimmed.startswith('/*'):
        return True
    return '*/' in trimmed and not USING_DIRECTIVE_RE.match(trimmed)


@dataclass
class UsingStatement:
    """One parsed line of a using block.

    Exactly one of ``is_comment``, ``is_conditional_directive`` and
    ``is_blank`` is set, or none of them for an actual using directive.
    Only actual directives carry attached comments.
    """
    text: str
    namespace: str = ""
    root_namespace: str = ""
    alias: Optional[str] = None
    is_static: bool = False
    is_global: bool = False
    is_conditional_directive: bool = False
    is_comment: bool = False
    is_blank: bool = False
    attached_comments: List["UsingStatement"] = field(default_factory=list)

    @classmethod
    def parse(cls, line: str) -> "UsingStatement":
        """Parse a line of text into a statement."""
        trimmed = line.strip()

        if not trimmed:
            return cls(text=line, is_blank=True)

        if is_comment_line(trimmed):
            return cls.comment(line)

        if trimmed.startswith('#'):
            return cls(text=line, is_conditional_directive=True)

        match = USING_DIRECTIVE_RE.match(trimmed)
        if not match:
            # Not a recognizable directive; keep it opaque
            return cls(text=line)

        namespace = match.group(4).strip()
        return cls(
            text=line,
            namespace=namespace,
            root_namespace=namespace.split('.')[0],
            alias=match.group(3),
            is_static=match.group(2) is not None,
            is_global=match.group(1) is not None,
        )

    @classmethod
    def comment(cls, line: str) -> "UsingStatement":
        """Comment statement, used for block-comment continuation lines too."""
        return cls(text=line, is_comment=True)

    @classmethod
    def blank_line(cls) -> "UsingStatement":
        return cls(text="", is_blank=True)

    @property
    def is_alias(self) -> bool:
        return self.alias is not None

    @property
    def is_directive(self) -> bool:
        """True for an actual using directive (not comment, preprocessor or blank)."""
        return not (self.is_comment or self.is_conditional_directive or self.is_blank)

    @property
    def sort_key(self) -> str:
        """Text the comparator orders by; aliases order by their declaration."""
        if self.is_alias:
            return f"{self.alias} = {self.namespace}"
        return self.namespace

    @property
    def dedup_key(self) -> str:
        """Key for duplicate removal; empty for lines that never deduplicate.

        The global and static modifiers and the alias name are part of the
        key, so only exact repeats of a directive collide.
        """
        if not self.is_directive:
            return ""
        prefix = ""
        if self.is_global:
            prefix += "global "
        if self.is_static:
            prefix += "static "
        return prefix + self.sort_key

    def attach_comment(self, comment: "UsingStatement") -> None:
        if not comment.is_comment:
            raise ValueError("Only comments can be attached to a using directive")
        self.attached_comments.append(comment)

    def set_attached_comments(self, comments: List["UsingStatement"]) -> None:
        for comment in comments:
            if not comment.is_comment:
                raise ValueError("Only comments can be attached to a using directive")
        self.attached_comments = list(comments)

    def to_lines(self) -> List[str]:
        """Attached comments followed by the statement itself."""
        return [c.text for c in self.attached_comments] + [self.text]

    def __str__(self) -> str:
        return self.text
