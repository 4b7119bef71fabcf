from typing import Any, Iterable, Iterator


class BaseParser:
    @classmethod
    def parse(cls, lines: Iterable[str]) -> Iterator[Any]:
        raise NotImplementedError("Реализуйте метод parse в наследнике")
