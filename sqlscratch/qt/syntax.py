"""
SQL and SQL*Plus syntax highlighter.

Highlights Oracle SQL keywords and functions, bind placeholders,
SQL*Plus directives at the start of a line outside any open statement,
strings and comments.
"""

from typing import List, Tuple

from PyQt6.QtCore import QRegularExpression
from PyQt6.QtGui import (
    QColor,
    QFont,
    QSyntaxHighlighter,
    QTextCharFormat,
    QTextDocument,
)

from .theme import Theme
from ..locator import statement_open_after

IN_COMMENT = 1
IN_STATEMENT = 2


SQL_KEYWORDS = {
    "SELECT", "FROM", "WHERE", "AND", "OR", "NOT", "IN", "IS", "NULL",
    "JOIN", "INNER", "LEFT", "RIGHT", "OUTER", "FULL", "CROSS", "ON",
    "GROUP", "BY", "HAVING", "ORDER", "ASC", "DESC",
    "INSERT", "INTO", "VALUES", "UPDATE", "SET", "DELETE", "MERGE",
    "CREATE", "TABLE", "INDEX", "VIEW", "DROP", "ALTER", "ADD", "COLUMN",
    "PRIMARY", "KEY", "FOREIGN", "REFERENCES", "CONSTRAINT", "UNIQUE",
    "UNION", "ALL", "DISTINCT", "AS", "MINUS", "INTERSECT",
    "CASE", "WHEN", "THEN", "ELSE", "END",
    "LIKE", "BETWEEN", "EXISTS", "ANY", "SOME", "PRIOR",
    "FETCH", "FIRST", "NEXT", "ROWS", "ONLY", "CONNECT", "START",
    "WITH", "OVER", "PARTITION",
    "BEGIN", "COMMIT", "ROLLBACK", "DECLARE", "CURSOR", "FOR", "LOOP",
    "IF", "ELSIF", "RETURN", "PROCEDURE", "FUNCTION", "PACKAGE", "BODY",
    "EXCEPTION", "RAISE", "TRUNCATE", "GRANT", "REVOKE",
    "ROWNUM", "ROWID", "DUAL", "SYSDATE", "SYSTIMESTAMP",
}

SQL_FUNCTIONS = {
    "COUNT", "SUM", "AVG", "MIN", "MAX",
    "ABS", "ROUND", "TRUNC", "FLOOR", "CEIL", "MOD", "POWER", "SQRT",
    "NVL", "NVL2", "COALESCE", "NULLIF", "DECODE", "GREATEST", "LEAST",
    "CAST", "TO_CHAR", "TO_DATE", "TO_NUMBER", "TO_TIMESTAMP",
    "UPPER", "LOWER", "INITCAP", "TRIM", "LTRIM", "RTRIM", "LENGTH",
    "SUBSTR", "INSTR", "REPLACE", "TRANSLATE", "LPAD", "RPAD", "CONCAT",
    "REGEXP_LIKE", "REGEXP_SUBSTR", "REGEXP_REPLACE", "REGEXP_INSTR",
    "ADD_MONTHS", "MONTHS_BETWEEN", "LAST_DAY", "NEXT_DAY", "EXTRACT",
    "ROW_NUMBER", "RANK", "DENSE_RANK", "LAG", "LEAD", "LISTAGG",
    "FIRST_VALUE", "LAST_VALUE", "NTILE",
}

SQLPLUS_DIRECTIVES = {
    "SET", "SHOW", "DESCRIBE", "DESC", "PROMPT", "SPOOL", "COLUMN", "COL",
    "DEFINE", "UNDEFINE", "EXEC", "EXECUTE", "REM", "REMARK", "VARIABLE",
    "VAR", "PRINT", "BREAK", "COMPUTE", "TTITLE", "BTITLE", "WHENEVER",
}


def _case_insensitive(pattern: str) -> QRegularExpression:
    regex = QRegularExpression(pattern)
    regex.setPatternOptions(QRegularExpression.PatternOption.CaseInsensitiveOption)
    return regex


class SQLHighlighter(QSyntaxHighlighter):
    """Syntax highlighter for SQL scripts."""

    def __init__(self, document: QTextDocument):
        super().__init__(document)
        self._rules: List[Tuple[QRegularExpression, QTextCharFormat]] = []
        self._build_rules()

    def _build_rules(self) -> None:
        """Build highlighting rules based on current theme."""
        colors = Theme.current()

        def fmt(color: str, bold: bool = False, italic: bool = False) -> QTextCharFormat:
            f = QTextCharFormat()
            f.setForeground(QColor(color))
            if bold:
                f.setFontWeight(QFont.Weight.Bold)
            f.setFontItalic(italic)
            return f

        self.string_format = fmt(colors.string)
        self.comment_format = fmt(colors.comment, italic=True)

        # Later rules win over earlier ones
        self._rules = [
            (_case_insensitive(r"\b(" + "|".join(SQL_KEYWORDS) + r")\b"),
             fmt(colors.keyword, bold=True)),
            (_case_insensitive(r"\b(" + "|".join(SQL_FUNCTIONS) + r")\s*(?=\()"),
             fmt(colors.function)),
            (QRegularExpression(r"\b\d+\.?\d*\b"), fmt(colors.number)),
            (QRegularExpression(r"(?<![\w:]):[A-Za-z]\w*"), fmt(colors.bind, bold=True)),
        ]
        self._directive_rule = (
            _case_insensitive(r"^\s*(" + "|".join(SQLPLUS_DIRECTIVES) + r")\b"),
            fmt(colors.directive, bold=True))
        self.single_line_comment_regex = QRegularExpression(r"--[^\n]*")

    def update_theme(self) -> None:
        """Update colors when theme changes."""
        self._build_rules()
        self.rehighlight()

    def _previous_state(self) -> int:
        return max(self.previousBlockState(), 0)

    def highlightBlock(self, text: str) -> None:
        """Apply syntax highlighting to a block of text.

        Block state bits: IN_COMMENT while a /* */ comment is open,
        IN_STATEMENT while a SQL statement awaits its terminator.
        """
        was_open = bool(self._previous_state() & IN_STATEMENT)
        in_comment = self._highlight_multiline_comments(text)
        comment_only = bool(self._previous_state() & IN_COMMENT) and in_comment
        open_after = was_open if comment_only else statement_open_after(text, was_open)
        self.setCurrentBlockState((IN_COMMENT if in_comment else 0)
                                  | (IN_STATEMENT if open_after else 0))

        if comment_only:
            return

        rules = list(self._rules)
        # Directive keywords like SET only count outside an open statement
        if not was_open:
            rules.append(self._directive_rule)
        for regex, char_format in rules:
            match_iterator = regex.globalMatch(text)
            while match_iterator.hasNext():
                match = match_iterator.next()
                if not self._in_string_or_comment(text, match.capturedStart()):
                    self.setFormat(match.capturedStart(), match.capturedLength(), char_format)

        match_iterator = self.single_line_comment_regex.globalMatch(text)
        while match_iterator.hasNext():
            match = match_iterator.next()
            if not self._in_string(text, match.capturedStart()):
                self.setFormat(match.capturedStart(), match.capturedLength(), self.comment_format)

        self._highlight_strings(text)

    def _highlight_strings(self, text: str) -> None:
        """Highlight single-quoted strings, handling '' escapes."""
        in_string = False
        string_start = 0

        i = 0
        while i < len(text):
            if text[i] == "'":
                if in_string and i + 1 < len(text) and text[i + 1] == "'":
                    i += 2
                    continue
                elif in_string:
                    self.setFormat(string_start, i - string_start + 1, self.string_format)
                    in_string = False
                else:
                    string_start = i
                    in_string = True
            i += 1

        if in_string:
            self.setFormat(string_start, len(text) - string_start, self.string_format)

    def _highlight_multiline_comments(self, text: str) -> bool:
        """Format /* */ comments; True when one is still open at the end of the block."""
        if self._previous_state() & IN_COMMENT:
            end_index = text.find("*/")
            if end_index == -1:
                self.setFormat(0, len(text), self.comment_format)
                return True
            self.setFormat(0, end_index + 2, self.comment_format)
            start_index = text.find("/*", end_index + 2)
        else:
            start_index = text.find("/*")

        while start_index >= 0:
            end_index = text.find("*/", start_index + 2)
            if end_index == -1:
                self.setFormat(start_index, len(text) - start_index, self.comment_format)
                return True
            self.setFormat(start_index, end_index - start_index + 2, self.comment_format)
            start_index = text.find("/*", end_index + 2)
        return False

    def _in_string(self, text: str, pos: int) -> bool:
        """Check if position is inside a string."""
        in_string = False
        i = 0
        while i < pos:
            if text[i] == "'":
                if in_string and i + 1 < len(text) and text[i + 1] == "'":
                    i += 2
                    continue
                in_string = not in_string
            i += 1
        return in_string

    def _in_string_or_comment(self, text: str, pos: int) -> bool:
        if self._in_string(text, pos):
            return True

        comment_pos = text.find("--")
        if comment_pos != -1 and comment_pos < pos and not self._in_string(text, comment_pos):
            return True

        if self._previous_state() & IN_COMMENT:
            end_pos = text.find("*/")
            if end_pos == -1 or pos < end_pos + 2:
                return True

        return False
