from __future__ import annotations

from dataclasses import dataclass

from .attendance.factory import AttendanceStrategyFactory
from .attendance.mysql_attendance_repository import MySQLAttendanceRepository
from .attendance.repository import AttendanceRepository
from .attendance.service import AttendanceService
from .core.constants import DEFAULT_STATS_LOOKBACK, METRICS_CAPACITY
from .database.connection import DBConfig, DatabaseConnection
from .employees.department_repository import DepartmentRepository
from .employees.mysql_department_repository import MySQLDepartmentRepository
from .employees.mysql_employee_repository import MySQLEmployeeRepository
from .employees.repository import EmployeeRepository
from .employees.service import DepartmentService, EmployeeService
from .metrics.monitor import PerformanceMonitor
from .stats.calculator.standard_calculator import ClampedHoursCalculator, StandardHoursCalculator
from .stats.service import AttendanceStatsService


@dataclass(frozen=True)
class Container:
    monitor: PerformanceMonitor

    employees_repo: EmployeeRepository
    departments_repo: DepartmentRepository
    attendance_repo: AttendanceRepository

    employee_service: EmployeeService
    department_service: DepartmentService
    attendance_service: AttendanceService
    stats_service: AttendanceStatsService


def build_services(
    *,
    employees_repo: EmployeeRepository,
    departments_repo: DepartmentRepository,
    attendance_repo: AttendanceRepository,
    monitor: PerformanceMonitor,
    clamp_negative_hours: bool = False,
    stats_lookback: int = DEFAULT_STATS_LOOKBACK,
) -> Container:
    """Wire services on top of any repository implementation."""

    calculator = ClampedHoursCalculator() if clamp_negative_hours else StandardHoursCalculator()
    return Container(
        monitor=monitor,
        employees_repo=employees_repo,
        departments_repo=departments_repo,
        attendance_repo=attendance_repo,
        employee_service=EmployeeService(employees_repo),
        department_service=DepartmentService(departments_repo, employees_repo),
        attendance_service=AttendanceService(
            attendance_repo,
            employees_repo,
            strategy_factory=AttendanceStrategyFactory(),
        ),
        stats_service=AttendanceStatsService(
            attendance_repo,
            employees_repo,
            calculator=calculator,
            lookback=stats_lookback,
        ),
    )


def build_container(
    *,
    db_config: dict,
    metrics_capacity: int = METRICS_CAPACITY,
    clamp_negative_hours: bool = False,
    stats_lookback: int = DEFAULT_STATS_LOOKBACK,
) -> Container:
    config = DBConfig(
        host=str(db_config["host"]),
        port=int(db_config.get("port", 3306)),
        user=str(db_config["user"]),
        password=str(db_config["password"]),
        database=str(db_config["database"]),
    )
    monitor = PerformanceMonitor(metrics_capacity)
    conn = DatabaseConnection(config, observer=monitor)

    return build_services(
        employees_repo=MySQLEmployeeRepository(conn),
        departments_repo=MySQLDepartmentRepository(conn),
        attendance_repo=MySQLAttendanceRepository(conn),
        monitor=monitor,
        clamp_negative_hours=clamp_negative_hours,
        stats_lookback=stats_lookback,
    )
