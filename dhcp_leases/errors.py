class DhcpLeasesError(Exception):
    """Базовая ошибка: любая из них прерывает запуск целиком."""


class LeaseParseError(DhcpLeasesError):
    def __init__(self, message: str, line_number: int = 0, line: str = ""):
        self.line_number = line_number
        self.line = line
        if line_number:
            message = f"строка {line_number}: {message} ('{line}')"
        super().__init__(message)


class OuiStoreError(DhcpLeasesError):
    pass


class ConfigError(DhcpLeasesError):
    pass


class InputReadError(DhcpLeasesError):
    pass
