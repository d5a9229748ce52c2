import logging
import os
import socket
from dataclasses import dataclass
from pathlib import Path

from smarthome.config import SmartHomeConfig

logger = logging.getLogger(__name__)


@dataclass
class HealthCheckResult:
    name: str
    passed: bool
    detail: str


def run_startup_checks(config: SmartHomeConfig) -> list[HealthCheckResult]:
    results = [
        _check_tcp_port(config),
        _check_log_file(config),
        _check_session_limit(config),
    ]

    passed = sum(1 for r in results if r.passed)

    logger.info("Health check: %d/%d passed", passed, len(results))
    for result in results:
        level = logging.INFO if result.passed else logging.WARNING
        symbol = "OK" if result.passed else "FAIL"
        logger.log(level, "  [%s] %s: %s", symbol, result.name, result.detail)

    return results


def has_critical_failures(results: list[HealthCheckResult]) -> bool:
    critical_checks = {"tcp_port", "session_limit"}
    return any(not r.passed and r.name in critical_checks for r in results)


def _check_tcp_port(config: SmartHomeConfig) -> HealthCheckResult:
    name = "tcp_port"
    try:
        with socket.socket(socket.AF_INET, socket.SOCK_STREAM) as probe:
            probe.setsockopt(socket.SOL_SOCKET, socket.SO_REUSEADDR, 1)
            probe.bind((config.tcp_host, config.tcp_port))
        return HealthCheckResult(name=name, passed=True, detail=f"{config.tcp_host}:{config.tcp_port} available")
    except OSError as exc:
        return HealthCheckResult(name=name, passed=False, detail=f"Cannot bind {config.tcp_host}:{config.tcp_port}: {exc}")


def _check_log_file(config: SmartHomeConfig) -> HealthCheckResult:
    name = "log_file"
    if not config.log_file:
        return HealthCheckResult(name=name, passed=True, detail="File logging disabled")

    directory = Path(config.log_file).parent
    if not directory.is_dir():
        return HealthCheckResult(name=name, passed=False, detail=f"Directory {directory} does not exist")
    if not os.access(directory, os.W_OK):
        return HealthCheckResult(name=name, passed=False, detail=f"Directory {directory} is not writable")
    return HealthCheckResult(name=name, passed=True, detail=f"Logging to {config.log_file}")


def _check_session_limit(config: SmartHomeConfig) -> HealthCheckResult:
    name = "session_limit"
    if config.max_sessions < 1:
        return HealthCheckResult(name=name, passed=False, detail=f"max_sessions={config.max_sessions} must be >= 1")
    return HealthCheckResult(name=name, passed=True, detail=f"Up to {config.max_sessions} concurrent sessions")
