"""
calc_core: расчётное ядро теплообменника «труба в трубе».

- тепловая нагрузка Q (политика MIN / AVERAGE), LMTD, U, эффективность
- средняя эффективность по серии замеров

Отображение (таблицы, графики) намеренно вне ядра: UI только вызывает compute().
"""

from .thermal import (
    BatchResult,
    ExchangerConfig,
    Reading,
    ReadingFailure,
    ReadingResult,
    ThermalCalcError,
    average_effectiveness,
    compute,
    lmtd,
)

__all__ = [
    "BatchResult",
    "ExchangerConfig",
    "Reading",
    "ReadingFailure",
    "ReadingResult",
    "ThermalCalcError",
    "average_effectiveness",
    "compute",
    "lmtd",
]
