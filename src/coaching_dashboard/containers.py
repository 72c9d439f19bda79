"""Dependency container wiring for the application."""

from dataclasses import dataclass

from supabase import create_client

from coaching_dashboard.adapters.json_file_cache import JsonFileLocalCache
from coaching_dashboard.adapters.supabase_day_repository import SupabaseDayRepository
from coaching_dashboard.config import Settings
from coaching_dashboard.domain.protocol import FatLossProtocol
from coaching_dashboard.services.dashboard import DashboardService
from coaching_dashboard.services.day_log import DayLogService
from coaching_dashboard.services.persistence import DayRepository, PersistenceService


@dataclass
class AppContainer:
    """Holds application-wide dependencies."""

    settings: Settings
    persistence_service: PersistenceService
    day_log_service: DayLogService
    dashboard_service: DashboardService


def build_container(settings: Settings | None = None) -> AppContainer:
    """Create the default dependency container.

    The Supabase client is only created when both credentials are present;
    otherwise the app runs against the local cache alone.
    """
    resolved_settings = settings or Settings()
    remote_config = resolved_settings.remote_config()
    remote: DayRepository | None = None
    if remote_config.is_configured():
        supabase_client = create_client(remote_config.url, remote_config.key)
        remote = SupabaseDayRepository(supabase_client)
    persistence_service = PersistenceService(
        local_cache=JsonFileLocalCache(resolved_settings.local_cache_path),
        remote=remote,
        remote_config=remote_config,
    )
    return AppContainer(
        settings=resolved_settings,
        persistence_service=persistence_service,
        day_log_service=DayLogService(persistence_service),
        dashboard_service=DashboardService(FatLossProtocol()),
    )
