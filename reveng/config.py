import os
from dataclasses import dataclass
from typing import Optional

from dotenv import load_dotenv

load_dotenv()


def _env_flag(name: str, default: bool = False) -> bool:
    value = os.environ.get(name)
    if value is None:
        return default
    return value.strip().lower() in ('1', 'true', 'yes', 'on')


class Config:
    DATABASE_URL = os.environ.get('DATABASE_URL') or 'sqlite:///schema.db'

    # Catalog/schema stripped from generated names when a table lives in them
    DEFAULT_CATALOG = os.environ.get('REVENG_DEFAULT_CATALOG') or None
    DEFAULT_SCHEMA = os.environ.get('REVENG_DEFAULT_SCHEMA') or None

    PREFER_BASIC_COMPOSITE_IDS = _env_flag('REVENG_PREFER_BASIC_COMPOSITE_IDS')
    PACKAGE_NAME = os.environ.get('REVENG_PACKAGE_NAME', '')


@dataclass(frozen=True)
class BinderSettings:
    """Inputs consumed once at the start of a binding run."""

    default_catalog: Optional[str] = None
    default_schema: Optional[str] = None
    prefer_basic_composite_ids: bool = False

    @classmethod
    def from_config(cls, config=Config) -> 'BinderSettings':
        return cls(
            default_catalog=config.DEFAULT_CATALOG,
            default_schema=config.DEFAULT_SCHEMA,
            prefer_basic_composite_ids=config.PREFER_BASIC_COMPOSITE_IDS,
        )
