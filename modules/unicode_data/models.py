"""Описания моделей данных о кодовых точках Unicode, хранимых в БД, и их представлений в памяти."""
import dataclasses
import typing as t

from sqlalchemy import Integer, SmallInteger, VARCHAR, false, true
from sqlalchemy.orm import Mapped, mapped_column

from api import DBModel


__all__ = [
    'UnicodeBase', 'UnicodeChar', 'SpecialCodepoints',
    'CodepointRecord', 'SpecialRange', 'parse_codepoints', 'codepoints_to_str',
]
AsciiType = VARCHAR(6)
SequenceType = VARCHAR(255)


def parse_codepoints(sequence: t.Optional[str]) -> list[int]:
    """Разбирает строку из шестнадцатеричных кодов, разделённых пробелами, в список кодовых точек."""
    if not sequence:
        return []
    return [int(item, 16) for item in sequence.split()]


def codepoints_to_str(sequence: t.Optional[str]) -> str:
    """Превращает строку из шестнадцатеричных кодов в строку из соответствующих символов."""
    return ''.join(chr(cp) for cp in parse_codepoints(sequence))


@dataclasses.dataclass
class CodepointRecord:
    """Сведения об одной кодовой точке."""
    codepoint: int
    description: str = ''
    category: t.Optional[str] = None
    bidi_class: t.Optional[str] = None
    combining_class: int = 0
    is_upper: bool = False
    is_lower: bool = False
    is_emoji: bool = False
    is_whitespace: bool = False
    is_printable: bool = True
    is_zero_width: bool = False
    decomposition: t.Optional[str] = None
    uppercase: t.Optional[str] = None
    lowercase: t.Optional[str] = None
    ascii: t.Optional[str] = None

    @property
    def hcode(self) -> str:
        """Код символа в шестнадцатеричном виде, не менее 4 цифр."""
        return f'{self.codepoint:04X}'

    @property
    def char(self) -> str:
        return chr(self.codepoint)

    def decomposition_codepoints(self) -> list[int]:
        """Кодовые точки, на которые раскладывается символ."""
        return parse_codepoints(self.decomposition)


@dataclasses.dataclass(frozen=True)
class SpecialRange:
    """Диапазон кодовых точек, у которых намеренно нет записи: зарезервированные, суррогаты, не-символы."""
    first: int
    last: int
    description: str = 'Reserved'


class UnicodeBase(DBModel):
    __abstract__ = True


class UnicodeChar(UnicodeBase):
    __tablename__ = 'chars'
    codepoint: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=False,
                                           comment='Кодовая точка')
    description: Mapped[str] = mapped_column(VARCHAR(255), nullable=False, server_default='',
                                             comment='Имя символа')
    ascii: Mapped[t.Optional[str]] = mapped_column(AsciiType, nullable=True, index=True,
                                                   comment='ASCII-эквивалент символа')
    block: Mapped[t.Optional[str]] = mapped_column(VARCHAR(255), nullable=True, comment='Блок Unicode')
    script: Mapped[t.Optional[str]] = mapped_column(VARCHAR(4), nullable=True, comment='Письменность')
    category: Mapped[t.Optional[str]] = mapped_column(VARCHAR(2), nullable=True, comment='Общая категория')
    bidi_class: Mapped[t.Optional[str]] = mapped_column(VARCHAR(3), nullable=True,
                                                        comment='Класс двунаправленного текста')
    combining_class: Mapped[int] = mapped_column(SmallInteger, nullable=False, server_default='0',
                                                 comment='Класс комбинирования')
    is_upper: Mapped[bool] = mapped_column(nullable=False, server_default=false())
    is_lower: Mapped[bool] = mapped_column(nullable=False, server_default=false())
    is_emoji: Mapped[bool] = mapped_column(nullable=False, server_default=false())
    is_whitespace: Mapped[bool] = mapped_column(nullable=False, server_default=false())
    is_printable: Mapped[bool] = mapped_column(nullable=False, server_default=true())
    is_zero_width: Mapped[bool] = mapped_column(nullable=False, server_default=false())
    decomposition: Mapped[t.Optional[str]] = mapped_column(SequenceType, nullable=True,
                                                           comment='Разложение, коды через пробел')
    uppercase: Mapped[t.Optional[str]] = mapped_column(SequenceType, nullable=True,
                                                       comment='Заглавный вариант, коды через пробел')
    lowercase: Mapped[t.Optional[str]] = mapped_column(SequenceType, nullable=True,
                                                       comment='Строчный вариант, коды через пробел')

    def to_record(self) -> CodepointRecord:
        """Превращает строку таблицы в независимую от сессии запись."""
        return CodepointRecord(
            codepoint=self.codepoint,
            description=self.description or '',
            category=self.category,
            bidi_class=self.bidi_class,
            combining_class=self.combining_class or 0,
            is_upper=bool(self.is_upper),
            is_lower=bool(self.is_lower),
            is_emoji=bool(self.is_emoji),
            is_whitespace=bool(self.is_whitespace),
            is_printable=bool(self.is_printable),
            is_zero_width=bool(self.is_zero_width),
            decomposition=self.decomposition,
            uppercase=self.uppercase,
            lowercase=self.lowercase,
            ascii=self.ascii,
        )


class SpecialCodepoints(UnicodeBase):
    __tablename__ = 'special'
    first_codepoint: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=False,
                                                 comment='Первая кодовая точка диапазона')
    last_codepoint: Mapped[int] = mapped_column(Integer, nullable=False,
                                                comment='Последняя кодовая точка диапазона (включительно)')
    description: Mapped[t.Optional[str]] = mapped_column(VARCHAR(255), nullable=True, comment='Назначение')

    def to_range(self) -> SpecialRange:
        return SpecialRange(first=self.first_codepoint, last=self.last_codepoint,
                            description=self.description or 'Reserved')
