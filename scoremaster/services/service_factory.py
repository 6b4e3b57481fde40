"""
Service Factory for dependency injection following SOLID principles.

This module provides a factory for creating properly configured service instances
with their dependencies injected, following the Dependency Inversion Principle.
"""
from typing import Optional

from ..utils.constants import COMMENTARY_TIMEOUT_SEC, COMMENTARY_URL
from .commentary_service import CommentaryClient, CommentaryService, HttpCommentaryClient
from .export_service import ExportServiceInterface, MatchReportExporter
from .match_session import MatchSession


class ServiceFactory:
    """
    Factory for creating service instances with proper dependency injection.

    The commentary client and the exporter are shared singletons; every
    session gets its own commentary service so that resets stay local.
    """

    def __init__(self, commentary_url: str = COMMENTARY_URL, commentary_timeout: float = COMMENTARY_TIMEOUT_SEC):
        """Initialize factory with default configurations."""
        self.commentary_url = commentary_url
        self.commentary_timeout = commentary_timeout
        self._commentary_client: Optional[CommentaryClient] = None
        self._export_service: Optional[ExportServiceInterface] = None

    def create_commentary_service(self) -> CommentaryService:
        """
        Create CommentaryService with the configured client injected.

        Returns:
            Configured CommentaryService instance
        """
        return CommentaryService(client=self._get_commentary_client())

    def create_match_session(self, tick_interval: float = 1.0) -> MatchSession:
        """
        Create a MatchSession with all of its collaborators.

        Args:
            tick_interval: Seconds between clock ticks

        Returns:
            Configured MatchSession instance
        """
        return MatchSession(
            commentary_service=self.create_commentary_service(),
            exporter=self._get_export_service(),
            tick_interval=tick_interval,
        )

    def _get_commentary_client(self) -> CommentaryClient:
        """Get singleton commentary client."""
        if self._commentary_client is None:
            self._commentary_client = HttpCommentaryClient(
                base_url=self.commentary_url, timeout=self.commentary_timeout
            )
        return self._commentary_client

    def _get_export_service(self) -> ExportServiceInterface:
        """Get singleton export service."""
        if self._export_service is None:
            self._export_service = MatchReportExporter()
        return self._export_service

    def configure_custom_commentary_client(self, client: CommentaryClient) -> None:
        """Configure custom commentary client - supports OCP."""
        self._commentary_client = client

    def configure_custom_export_service(self, exporter: ExportServiceInterface) -> None:
        """Configure custom export service - supports OCP."""
        self._export_service = exporter
