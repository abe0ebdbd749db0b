from enum import Enum


class LexState(Enum):
    NORMAL = 1
    STRING = 2
    SLASH_STAR_COMMENT = 3
    ESCAPE = 4
    EOL_COMMENT = 5
    BACKTICK = 6


class ClientParser:
    """Command text split on its '?' placeholders."""

    __slots__ = ('sql', 'query_parts', 'param_count', 'statement_count')

    def __init__(self, sql: str, query_parts, statement_count: int):
        self.sql = sql
        self.query_parts = query_parts
        self.param_count = len(query_parts) - 1
        self.statement_count = statement_count

    def render(self, paramstyle: str) -> str:
        """
        Rebuild the command text with the placeholder syntax of a PEP 249 module.

        Only positional styles are supported, values are always bound as a sequence.
        """
        if paramstyle == "qmark":
            return "?".join(self.query_parts)
        if paramstyle in ("format", "pyformat"):
            return "%s".join(part.replace("%", "%%") for part in self.query_parts)
        if paramstyle == "numeric":
            sql = self.query_parts[0]
            for i, part in enumerate(self.query_parts[1:]):
                sql += ":" + str(i + 1) + part
            return sql
        raise ValueError("unsupported paramstyle '" + str(paramstyle) + "'")


def parameter_parts(sql: str, no_backslash_escapes: bool = False) -> ClientParser:
    part_list = []
    state = LexState.NORMAL
    last_char = '\0'
    single_quotes = False
    last_parameter_position = 0
    statement_count = 0
    has_content = False

    query_length = len(sql)
    for i in range(query_length):
        car = sql[i]
        if state == LexState.ESCAPE and not ((car == '\'' and single_quotes) or (car == '"' and not single_quotes)):
            state = LexState.STRING
            last_char = car
            continue

        if car == '*':
            if state == LexState.NORMAL and last_char == '/':
                state = LexState.SLASH_STAR_COMMENT
        elif car == '/':
            if state == LexState.SLASH_STAR_COMMENT and last_char == '*':
                state = LexState.NORMAL
            elif state == LexState.NORMAL and last_char == '/':
                state = LexState.EOL_COMMENT
        elif car == '#':
            if state == LexState.NORMAL:
                state = LexState.EOL_COMMENT
        elif car == '-':
            if state == LexState.NORMAL and last_char == '-':
                state = LexState.EOL_COMMENT
        elif car == '\n':
            if state == LexState.EOL_COMMENT:
                state = LexState.NORMAL
        elif car == '"':
            if state == LexState.NORMAL:
                state = LexState.STRING
                single_quotes = False
                has_content = True
            elif state == LexState.STRING and not single_quotes:
                state = LexState.NORMAL
            elif state == LexState.ESCAPE:
                state = LexState.STRING
        elif car == '\'':
            if state == LexState.NORMAL:
                state = LexState.STRING
                single_quotes = True
                has_content = True
            elif state == LexState.STRING and single_quotes:
                state = LexState.NORMAL
            elif state == LexState.ESCAPE:
                state = LexState.STRING
        elif car == '\\':
            if not no_backslash_escapes and state == LexState.STRING:
                state = LexState.ESCAPE
        elif car == ';':
            if state == LexState.NORMAL:
                if has_content:
                    statement_count += 1
                has_content = False
        elif car == '?':
            if state == LexState.NORMAL:
                part_list.append(sql[last_parameter_position:i])
                last_parameter_position = i + 1
                has_content = True
        elif car == '`':
            if state == LexState.BACKTICK:
                state = LexState.NORMAL
            elif state == LexState.NORMAL:
                state = LexState.BACKTICK
                has_content = True
        else:
            if state == LexState.NORMAL and not car.isspace():
                has_content = True
        last_char = car

    # last statement may omit its terminating semicolon
    if has_content:
        statement_count += 1

    if last_parameter_position == 0:
        part_list.append(sql)
    else:
        part_list.append(sql[last_parameter_position:query_length])

    return ClientParser(sql, part_list, statement_count)
