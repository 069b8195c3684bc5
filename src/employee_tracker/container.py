from __future__ import annotations

from dataclasses import dataclass

from .attendance.factory import AttendanceStrategyFactory
from .attendance.service import AttendanceService
from .attendance.sql_attendance_repository import SQLAttendanceRepository
from .common.events import ChangeNotifier
from .dashboard.viewstate import AdminDashboardState, ConversationState, EmployeeHomeState
from .database.connection import DBConfig, DatabaseConnection
from .messages.service import MessageService
from .messages.sql_message_repository import SQLMessageRepository
from .reviews.service import ReviewService
from .reviews.sql_review_repository import SQLReviewRepository
from .tasks.service import TaskService
from .tasks.sql_task_repository import SQLTaskRepository
from .users.service import AuthService, UserService
from .users.session import AuthSession
from .users.sql_user_repository import SQLUserRepository


@dataclass(frozen=True)
class Container:
    conn: DatabaseConnection
    notifier: ChangeNotifier

    users_repo: SQLUserRepository
    tasks_repo: SQLTaskRepository
    reviews_repo: SQLReviewRepository
    attendance_repo: SQLAttendanceRepository
    messages_repo: SQLMessageRepository

    auth_service: AuthService
    user_service: UserService
    task_service: TaskService
    review_service: ReviewService
    attendance_service: AttendanceService
    message_service: MessageService

    session: AuthSession

    def admin_dashboard(self) -> AdminDashboardState:
        return AdminDashboardState(self.users_repo, self.tasks_repo, self.reviews_repo)

    def employee_home(self, employee_id: int) -> EmployeeHomeState:
        return EmployeeHomeState(employee_id, self.tasks_repo, self.reviews_repo, self.messages_repo)

    def conversation(self, user_id: int, other_id: int) -> ConversationState:
        return ConversationState(user_id, other_id, self.messages_repo)


def build_container(*, db_config: dict) -> Container:
    conn = DatabaseConnection(DBConfig.from_dict(db_config))
    notifier = ChangeNotifier()

    users_repo = SQLUserRepository(conn, notifier)
    tasks_repo = SQLTaskRepository(conn, notifier)
    reviews_repo = SQLReviewRepository(conn, notifier)
    attendance_repo = SQLAttendanceRepository(conn, notifier)
    messages_repo = SQLMessageRepository(conn, notifier)

    auth_service = AuthService(users_repo)

    return Container(
        conn=conn,
        notifier=notifier,
        users_repo=users_repo,
        tasks_repo=tasks_repo,
        reviews_repo=reviews_repo,
        attendance_repo=attendance_repo,
        messages_repo=messages_repo,
        auth_service=auth_service,
        user_service=UserService(users_repo),
        task_service=TaskService(tasks_repo, users_repo),
        review_service=ReviewService(reviews_repo, users_repo),
        attendance_service=AttendanceService(
            attendance_repo,
            users_repo,
            strategy_factory=AttendanceStrategyFactory(),
        ),
        message_service=MessageService(messages_repo, users_repo),
        session=AuthSession(auth_service),
    )
