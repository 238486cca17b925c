"""Общая инфраструктура: протоколы взаимодействия компонентов, менеджер конфигурации,
настройка журнала работы и мелкие утилиты."""
from ._protocols import *
from ._tools import *
from ._config_manager import ConfigManagerImpl
from ._logs import setup_logging, LoggingCfg
