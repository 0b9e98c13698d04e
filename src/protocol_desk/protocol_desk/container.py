from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from .auth.mysql_user_repository import MySQLUserRepository
from .auth.passwords.verifier import PasswordVerifier
from .auth.repository import UserRepository
from .auth.service import AuthService
from .auth.tokens import SessionTokenSigner
from .core.constants import (
    DEFAULT_DEPARTMENT_NAME,
    DEFAULT_TOKEN_MAX_AGE_DAYS,
    DEFAULT_UPLOAD_TIMEOUT_SECONDS,
    MAX_COMPANION_WORKERS,
    PHOTO_FOLDER,
)
from .dashboard.service import DashboardService
from .database.connection import DBConfig, DatabaseConnection
from .drivers.service import DriverLinkService
from .groups.service import GroupBookingService
from .photos.cloudinary_client import CloudinaryClient
from .photos.service import PhotoUploader, PhotoUploadService
from .visitors.mysql_visitor_repository import MySQLVisitorRepository
from .visitors.repository import VisitorRepository
from .visitors.service import VisitorService


@dataclass(frozen=True)
class Container:
    conn: Optional[DatabaseConnection]

    users_repo: UserRepository
    visitors_repo: VisitorRepository

    token_signer: SessionTokenSigner
    auth_service: AuthService
    visitor_service: VisitorService
    group_booking_service: GroupBookingService
    dashboard_service: DashboardService
    photo_service: PhotoUploadService
    driver_link_service: DriverLinkService

    department_name: str = DEFAULT_DEPARTMENT_NAME


def assemble(
    *,
    users_repo: UserRepository,
    visitors_repo: VisitorRepository,
    uploader: PhotoUploader,
    secret_key: str,
    app_url: str,
    department_name: str = DEFAULT_DEPARTMENT_NAME,
    token_max_age_days: int = DEFAULT_TOKEN_MAX_AGE_DAYS,
    max_companion_workers: int = MAX_COMPANION_WORKERS,
    conn: Optional[DatabaseConnection] = None,
) -> Container:
    """Wire services around already-built repositories."""
    token_signer = SessionTokenSigner(secret_key, max_age_days=token_max_age_days)
    auth_service = AuthService(users_repo, verifier=PasswordVerifier(), department_name=department_name)
    visitor_service = VisitorService(visitors_repo)
    group_booking_service = GroupBookingService(visitor_service, max_workers=max_companion_workers)
    dashboard_service = DashboardService(visitor_service)
    photo_service = PhotoUploadService(uploader)
    driver_link_service = DriverLinkService(visitor_service, base_url=app_url)

    return Container(
        conn=conn,
        users_repo=users_repo,
        visitors_repo=visitors_repo,
        token_signer=token_signer,
        auth_service=auth_service,
        visitor_service=visitor_service,
        group_booking_service=group_booking_service,
        dashboard_service=dashboard_service,
        photo_service=photo_service,
        driver_link_service=driver_link_service,
        department_name=department_name,
    )


def build_container(
    *,
    db_config: dict,
    secret_key: str,
    app_url: str,
    department_name: str = DEFAULT_DEPARTMENT_NAME,
    token_max_age_days: int = DEFAULT_TOKEN_MAX_AGE_DAYS,
    cloudinary_cloud_name: Optional[str] = None,
    cloudinary_upload_preset: Optional[str] = None,
    cloudinary_folder: str = PHOTO_FOLDER,
    upload_timeout: float = DEFAULT_UPLOAD_TIMEOUT_SECONDS,
) -> Container:
    conn = DatabaseConnection(DBConfig.from_dict(db_config))

    return assemble(
        users_repo=MySQLUserRepository(conn),
        visitors_repo=MySQLVisitorRepository(conn),
        uploader=CloudinaryClient(
            cloudinary_cloud_name,
            cloudinary_upload_preset,
            folder=cloudinary_folder,
            timeout=upload_timeout,
        ),
        secret_key=secret_key,
        app_url=app_url,
        department_name=department_name,
        token_max_age_days=token_max_age_days,
        conn=conn,
    )
