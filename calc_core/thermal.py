from __future__ import annotations

"""
Thermal performance of a double-pipe heat exchanger (counter-flow).

Per reading:
- Qh = m_h * cp * (Th_in - Th_out), Qc = m_c * cp * (Tc_out - Tc_in)
- Q by duty policy: MIN -> min(Qh, Qc), AVERAGE -> (Qh + Qc) / 2
- dT1 = Th_in - Tc_out, dT2 = Th_out - Tc_in, LMTD over (dT1, dT2)
- U = Q / (A * LMTD)
- effectiveness = Q / (Cmin * (Th_in - Tc_in))

Reading-level errors do not abort the batch: the reading is moved to
BatchResult.failures and excluded from the average. Config-level errors
(area, cp, policy, empty batch) raise from compute().
"""

import logging
import math
from dataclasses import dataclass
from typing import Iterable, Sequence

logger = logging.getLogger(__name__)

DEFAULT_SPECIFIC_HEAT = 4186.0
WATER_SPECIFIC_HEAT_ALT = 4187.0
DEFAULT_SURFACE_AREA = 0.157
LMTD_EPSILON = 1e-6

DUTY_POLICY_MIN = "MIN"
DUTY_POLICY_AVERAGE = "AVERAGE"
DUTY_POLICIES = (DUTY_POLICY_MIN, DUTY_POLICY_AVERAGE)


class ThermalCalcError(ValueError):
    kind = "THERMAL_CALC_ERROR"


class InvalidTemperatureProfileError(ThermalCalcError):
    kind = "INVALID_TEMPERATURE_PROFILE"


class InvalidReadingError(ThermalCalcError):
    kind = "INVALID_READING"


class DivisionByZeroError(ThermalCalcError):
    kind = "DIVISION_BY_ZERO"


class InvalidConfigError(ThermalCalcError):
    kind = "INVALID_CONFIG"


class EmptyBatchError(ThermalCalcError):
    kind = "EMPTY_BATCH"


@dataclass(frozen=True)
class Reading:
    hot_mass_flow: float
    cold_mass_flow: float
    hot_inlet_temp: float
    hot_outlet_temp: float
    cold_inlet_temp: float
    cold_outlet_temp: float
    label: str | None = None

    @classmethod
    def with_shared_flow(
        cls,
        mass_flow: float,
        hot_inlet_temp: float,
        hot_outlet_temp: float,
        cold_inlet_temp: float,
        cold_outlet_temp: float,
        *,
        label: str | None = None,
    ) -> "Reading":
        """Simplified variant: hot and cold streams share one mass flow."""
        return cls(
            hot_mass_flow=mass_flow,
            cold_mass_flow=mass_flow,
            hot_inlet_temp=hot_inlet_temp,
            hot_outlet_temp=hot_outlet_temp,
            cold_inlet_temp=cold_inlet_temp,
            cold_outlet_temp=cold_outlet_temp,
            label=label,
        )

    @property
    def shared_flow(self) -> bool:
        return self.hot_mass_flow == self.cold_mass_flow


@dataclass(frozen=True)
class ExchangerConfig:
    surface_area: float = DEFAULT_SURFACE_AREA
    specific_heat: float = DEFAULT_SPECIFIC_HEAT
    duty_policy: str = DUTY_POLICY_MIN


@dataclass(frozen=True)
class ReadingResult:
    index: int
    reading: Reading
    hot_duty: float
    cold_duty: float
    heat_duty: float
    delta_t1: float
    delta_t2: float
    lmtd: float
    overall_coefficient: float
    c_min: float
    q_max: float
    effectiveness: float
    warnings: tuple[str, ...] = ()


@dataclass(frozen=True)
class ReadingFailure:
    index: int
    reading: Reading
    kind: str
    message: str


@dataclass(frozen=True)
class BatchResult:
    config: ExchangerConfig
    results: tuple[ReadingResult, ...]
    failures: tuple[ReadingFailure, ...] = ()
    average_effectiveness_pct: float | None = None

    @property
    def duty_policy(self) -> str:
        return self.config.duty_policy

    @property
    def excluded_count(self) -> int:
        return len(self.failures)

    @property
    def reading_count(self) -> int:
        return len(self.results) + len(self.failures)


def _require_number(value: object, name: str, error: type[ThermalCalcError]) -> float:
    if not isinstance(value, (int, float)) or isinstance(value, bool):
        raise error(f"{name} must be a number")
    val = float(value)
    if math.isnan(val) or math.isinf(val):
        raise error(f"{name} must be finite")
    return val


def normalize_duty_policy(policy: str) -> str:
    if not isinstance(policy, str):
        raise InvalidConfigError("duty_policy must be a string")
    policy_norm = policy.strip().upper()
    if policy_norm in ("AVG", "MEAN"):
        return DUTY_POLICY_AVERAGE
    if policy_norm not in DUTY_POLICIES:
        raise InvalidConfigError("duty_policy must be MIN or AVERAGE")
    return policy_norm


def validate_config(config: ExchangerConfig) -> ExchangerConfig:
    """Returns config with the duty policy normalized; raises InvalidConfigError."""
    area = _require_number(config.surface_area, "surface_area", InvalidConfigError)
    cp = _require_number(config.specific_heat, "specific_heat", InvalidConfigError)
    if area <= 0.0:
        raise InvalidConfigError("surface_area must be > 0")
    if cp <= 0.0:
        raise InvalidConfigError("specific_heat must be > 0")
    policy = normalize_duty_policy(config.duty_policy)
    return ExchangerConfig(surface_area=area, specific_heat=cp, duty_policy=policy)


def heat_duty(hot_duty: float, cold_duty: float, policy: str) -> float:
    if policy == DUTY_POLICY_MIN:
        return min(hot_duty, cold_duty)
    if policy == DUTY_POLICY_AVERAGE:
        return (hot_duty + cold_duty) / 2.0
    raise InvalidConfigError(f"Unsupported duty_policy: {policy}")


def lmtd(delta_t1: float, delta_t2: float, *, eps: float = LMTD_EPSILON) -> float:
    """
    Log-mean temperature difference.

    Both terminal differences must be positive (no temperature crossover).
    Within eps of each other the limit value dT1 is returned.
    """
    if delta_t1 <= 0.0 or delta_t2 <= 0.0:
        raise InvalidTemperatureProfileError(
            f"temperature crossover: dT1={delta_t1:g}, dT2={delta_t2:g} (both must be > 0)"
        )
    if abs(delta_t1 - delta_t2) < eps:
        return float(delta_t1)
    return (delta_t1 - delta_t2) / math.log(delta_t1 / delta_t2)


def _checked(value: float, name: str) -> float:
    # area and LMTD are > 0 here, so a non-finite value is an overflow of the inputs
    if math.isnan(value) or math.isinf(value):
        raise InvalidReadingError(f"{name} is not finite (inputs out of range)")
    return value


def _physics_warnings(reading: Reading, effectiveness: float) -> tuple[str, ...]:
    warnings: list[str] = []
    if reading.hot_inlet_temp <= reading.hot_outlet_temp:
        warnings.append("hot stream does not cool (Th_in <= Th_out)")
    if reading.cold_outlet_temp <= reading.cold_inlet_temp:
        warnings.append("cold stream does not heat (Tc_out <= Tc_in)")
    if effectiveness > 1.0:
        warnings.append("effectiveness > 1")
    elif effectiveness <= 0.0:
        warnings.append("effectiveness <= 0")
    return tuple(warnings)


def compute_reading(reading: Reading, config: ExchangerConfig, *, index: int = 0) -> ReadingResult:
    """
    Computes one reading against an already validated config.
    Raises a ThermalCalcError subclass when the reading cannot be evaluated.
    """
    m_hot = _require_number(reading.hot_mass_flow, "hot_mass_flow", InvalidReadingError)
    m_cold = _require_number(reading.cold_mass_flow, "cold_mass_flow", InvalidReadingError)
    th_in = _require_number(reading.hot_inlet_temp, "hot_inlet_temp", InvalidReadingError)
    th_out = _require_number(reading.hot_outlet_temp, "hot_outlet_temp", InvalidReadingError)
    tc_in = _require_number(reading.cold_inlet_temp, "cold_inlet_temp", InvalidReadingError)
    tc_out = _require_number(reading.cold_outlet_temp, "cold_outlet_temp", InvalidReadingError)
    if m_hot <= 0.0:
        raise InvalidReadingError("hot_mass_flow must be > 0")
    if m_cold <= 0.0:
        raise InvalidReadingError("cold_mass_flow must be > 0")

    cp = config.specific_heat
    c_hot = m_hot * cp
    c_cold = m_cold * cp

    q_hot = c_hot * (th_in - th_out)
    q_cold = c_cold * (tc_out - tc_in)
    q = heat_duty(q_hot, q_cold, config.duty_policy)

    delta_t1 = th_in - tc_out
    delta_t2 = th_out - tc_in
    lmtd_val = lmtd(delta_t1, delta_t2)
    if lmtd_val == 0.0:
        raise DivisionByZeroError("LMTD evaluates to zero")
    u = _checked(q / (config.surface_area * lmtd_val), "overall_coefficient")

    c_min = min(c_hot, c_cold)
    q_max = c_min * (th_in - tc_in)
    if q_max <= 0.0:
        raise DivisionByZeroError(
            f"Qmax must be > 0 (Th_in={th_in:g} must exceed Tc_in={tc_in:g})"
        )
    effectiveness = _checked(q / q_max, "effectiveness")

    return ReadingResult(
        index=index,
        reading=reading,
        hot_duty=_checked(q_hot, "hot_duty"),
        cold_duty=_checked(q_cold, "cold_duty"),
        heat_duty=_checked(q, "heat_duty"),
        delta_t1=delta_t1,
        delta_t2=delta_t2,
        lmtd=_checked(lmtd_val, "lmtd"),
        overall_coefficient=u,
        c_min=c_min,
        q_max=q_max,
        effectiveness=effectiveness,
        warnings=_physics_warnings(reading, effectiveness),
    )


def average_effectiveness(results: Iterable[ReadingResult]) -> float:
    """Mean effectiveness over successful results, in percent."""
    values = [r.effectiveness for r in results]
    if not values:
        raise EmptyBatchError("no successful results to average")
    return 100.0 * math.fsum(values) / len(values)


def format_percent(value: float | None, digits: int = 2) -> str:
    if value is None:
        return "-"
    return f"{value:.{digits}f}"


def compute(readings: Sequence[Reading], config: ExchangerConfig) -> BatchResult:
    """
    Runs the calculator over a batch of readings.

    Raises InvalidConfigError / EmptyBatchError for batch-level problems.
    Reading-level problems are reported in BatchResult.failures.
    """
    if readings is None or len(readings) == 0:
        raise EmptyBatchError("readings is empty")
    cfg = validate_config(config)

    results: list[ReadingResult] = []
    failures: list[ReadingFailure] = []
    for idx, reading in enumerate(readings):
        try:
            results.append(compute_reading(reading, cfg, index=idx))
        except ThermalCalcError as exc:
            logger.warning("reading #%d skipped: %s: %s", idx + 1, exc.kind, exc)
            failures.append(
                ReadingFailure(index=idx, reading=reading, kind=exc.kind, message=str(exc))
            )

    avg = average_effectiveness(results) if results else None
    logger.debug(
        "batch computed: policy=%s ok=%d failed=%d avg_eff_pct=%s",
        cfg.duty_policy,
        len(results),
        len(failures),
        format_percent(avg),
    )
    return BatchResult(
        config=cfg,
        results=tuple(results),
        failures=tuple(failures),
        average_effectiveness_pct=avg,
    )
