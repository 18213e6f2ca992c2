from __future__ import annotations

from fastapi import Depends

from libs.common import AppSettings, get_settings
from libs.common.storage import XmlFileStore


async def get_settings_dep() -> AppSettings:
    return get_settings()


def get_file_store(settings: AppSettings = Depends(get_settings_dep)) -> XmlFileStore:
    return XmlFileStore.from_settings(settings)
