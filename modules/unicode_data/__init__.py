"""Хранение сведений о кодовых точках Unicode: модели, хранилище в памяти и репозиторий БД."""
from .models import *
from .store import MemoryCodepointStore
from .repository import CodepointRepository
