import os
from pathlib import Path

import yaml
from dotenv import load_dotenv
from pydantic import BaseModel, Field, ValidationError

from dhcp_leases.errors import ConfigError

DEFAULT_SETTINGS_FILE = Path("config/settings.yaml")

# переменная окружения → поле Settings
ENV_OVERRIDES = {
    "DHCP_LEASES_FILE": "leases_file",
    "OUI_FILE": "oui_file",
    "OUI_DB": "oui_db",
}


class Settings(BaseModel):
    leases_file: Path = Path("/var/lib/dhcp/dhcpd.leases")
    oui_file: Path = Path("/usr/local/etc/oui.txt")
    oui_db: Path = Path("oui.db")
    oui_batch_size: int = Field(1000, ge=1)
    oui_rebuild: bool = True  # False: дописывать в существующий справочник


def load_settings(path: str | Path = DEFAULT_SETTINGS_FILE, use_dotenv: bool = True) -> Settings:
    """
    Порядок (последний побеждает): значения по умолчанию → YAML → переменные окружения.
    .env из рабочей директории подхватывается до чтения окружения.
    """
    if use_dotenv:
        load_dotenv(Path.cwd() / ".env")

    path = Path(path)
    data = {}

    if not path.exists():
        print(f"[CONFIG] {path} не найден — используем значения по умолчанию")
    else:
        try:
            with open(path, "r", encoding="utf-8") as f:
                data = yaml.safe_load(f)
        except (OSError, yaml.YAMLError) as e:
            raise ConfigError(f"не удалось прочитать {path}: {e}") from e

        if data is None:
            print(f"[CONFIG] {path} пустой — используем значения по умолчанию")
            data = {}
        elif not isinstance(data, dict):
            raise ConfigError(f"{path}: ожидается словарь настроек")

    for env_name, field in ENV_OVERRIDES.items():
        value = os.getenv(env_name)
        if value:
            data[field] = value

    try:
        return Settings(**data)
    except ValidationError as e:
        raise ConfigError(f"некорректные настройки: {e}") from e
