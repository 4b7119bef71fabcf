from typing import Callable, Dict, Iterable, Iterator, List, Tuple

# (источник, тип данных) → функция разбора строк
ParserFunc = Callable[[Iterable[str]], Iterator]

_parsers: Dict[Tuple[str, str], ParserFunc] = {}


def register_parser(source: str, data_slug: str, parser_func: ParserFunc) -> None:
    if (source, data_slug) in _parsers:
        raise ValueError(f"Парсер {source}/{data_slug} уже зарегистрирован")
    _parsers[(source, data_slug)] = parser_func


def get_parser(source: str, data_slug: str) -> ParserFunc:
    try:
        return _parsers[(source, data_slug)]
    except KeyError:
        known = ", ".join(f"{s}/{d}" for s, d in registered_parsers())
        raise LookupError(f"Нет парсера {source}/{data_slug} (есть: {known})") from None


def registered_parsers() -> List[Tuple[str, str]]:
    return sorted(_parsers)
