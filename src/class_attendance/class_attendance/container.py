from __future__ import annotations

from dataclasses import dataclass

from .attendance.repository import AttendanceRepository
from .attendance.mysql_attendance_repository import MySQLAttendanceRepository
from .attendance.workflow import MarkingWorkflow
from .auth.service import AuthService
from .classes.mysql_class_repository import MySQLClassRepository
from .classes.repository import ClassRepository
from .classes.service import DailyClassService
from .database.connection import DBConfig, DatabaseConnection
from .personnel.mysql_personnel_repository import MySQLPersonnelRepository
from .personnel.repository import PersonnelRepository
from .personnel.service import PersonnelService
from .reports.service import ReportService
from .timeslots.mysql_time_slot_repository import MySQLTimeSlotRepository
from .timeslots.repository import TimeSlotRepository
from .timeslots.service import TimeSlotService


@dataclass(frozen=True)
class Container:
    personnel_repo: PersonnelRepository
    slots_repo: TimeSlotRepository
    classes_repo: ClassRepository
    attendance_repo: AttendanceRepository

    auth_service: AuthService
    personnel_service: PersonnelService
    time_slot_service: TimeSlotService
    daily_class_service: DailyClassService
    report_service: ReportService

    def new_marking_workflow(self) -> MarkingWorkflow:
        """One workflow per editing session; it owns its present-set."""
        return MarkingWorkflow(self.personnel_service, self.daily_class_service, self.attendance_repo)


def wire(
    *,
    personnel_repo: PersonnelRepository,
    slots_repo: TimeSlotRepository,
    classes_repo: ClassRepository,
    attendance_repo: AttendanceRepository,
    auth_service: AuthService,
) -> Container:
    return Container(
        personnel_repo=personnel_repo,
        slots_repo=slots_repo,
        classes_repo=classes_repo,
        attendance_repo=attendance_repo,
        auth_service=auth_service,
        personnel_service=PersonnelService(personnel_repo),
        time_slot_service=TimeSlotService(slots_repo),
        daily_class_service=DailyClassService(classes_repo, slots_repo),
        report_service=ReportService(personnel_repo, slots_repo, classes_repo, attendance_repo),
    )


def build_container(*, db_config: dict, admin_username: str, admin_password: str) -> Container:
    conn = DatabaseConnection.get_instance(DBConfig.from_mapping(db_config))
    return wire(
        personnel_repo=MySQLPersonnelRepository(conn),
        slots_repo=MySQLTimeSlotRepository(conn),
        classes_repo=MySQLClassRepository(conn),
        attendance_repo=MySQLAttendanceRepository(conn),
        auth_service=AuthService(username=admin_username, password=admin_password),
    )
