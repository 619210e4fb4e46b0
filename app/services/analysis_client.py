"""
Analysis Client Abstraction Layer

Provides a unified interface for talking to the author analysis program:
- a local command (the analysis program run as a subprocess)
- a remote HTTP analysis service

The API routes only see AnalysisClient, so the backend can be switched
through configuration.
"""

import json
import logging
import shlex
import subprocess
from abc import ABC, abstractmethod
from typing import Any, Dict, Optional

import requests

from config import Config
from app.utils.performance import timer

logger = logging.getLogger(__name__)


class AnalysisError(Exception):
    """Raised when the analysis backend cannot produce a result."""

    def __init__(self, message: str, status_code: int = 502):
        super().__init__(message)
        self.message = message
        self.status_code = status_code


class AnalysisClient(ABC):
    """Abstract base class for analysis backends."""

    name = "abstract"

    @abstractmethod
    def analyze(self, text: str, options: Optional[Dict[str, Any]] = None) -> Any:
        """
        Run an analysis.

        Args:
            text: The text to analyse
            options: Backend specific options

        Returns:
            The decoded JSON result

        Raises:
            AnalysisError: If the backend is not configured or fails
        """
        pass

    @abstractmethod
    def is_configured(self) -> bool:
        """Whether the backend has enough configuration to run."""
        pass

    @staticmethod
    def _payload(text: str, options: Optional[Dict[str, Any]]) -> Dict[str, Any]:
        return {"text": text, "options": options or {}}


class CommandAnalysisClient(AnalysisClient):
    """Runs the analysis program locally, speaking JSON over stdin/stdout."""

    name = "command"

    def __init__(self, command: Optional[str] = None, timeout: Optional[float] = None):
        """
        Initialize the command client.

        Args:
            command: Command line of the analysis program
            timeout: Seconds to wait for the program to finish
        """
        command = Config.ANALYSIS_COMMAND if command is None else command
        self.argv = shlex.split(command) if command else []
        self.timeout = timeout or Config.ANALYSIS_TIMEOUT
        logger.info(f"Initialized command analysis client: {command or 'NOT SET'}")

    def is_configured(self) -> bool:
        return bool(self.argv)

    @timer("Analysis: command")
    def analyze(self, text: str, options: Optional[Dict[str, Any]] = None) -> Any:
        """Run the analysis program and decode its JSON output."""
        if not self.argv:
            raise AnalysisError("ANALYSIS_COMMAND is not configured", status_code=503)

        try:
            logger.debug(f"Running analysis program: {self.argv[0]}")
            completed = subprocess.run(
                self.argv,
                input=json.dumps(self._payload(text, options)),
                capture_output=True,
                text=True,
                timeout=self.timeout,
                check=False
            )
        except subprocess.TimeoutExpired:
            logger.error(f"Analysis program timed out after {self.timeout}s")
            raise AnalysisError(f"Analysis timed out after {self.timeout}s", status_code=504)
        except OSError as e:
            logger.error(f"Analysis program could not be started: {e}")
            raise AnalysisError(f"Analysis program could not be started: {e}")

        if completed.returncode != 0:
            stderr = completed.stderr.strip()
            logger.error(f"Analysis program exited with {completed.returncode}: {stderr}")
            raise AnalysisError(
                f"Analysis program exited with status {completed.returncode}: {stderr}"
            )

        try:
            return json.loads(completed.stdout)
        except json.JSONDecodeError as e:
            logger.error(f"Analysis program returned invalid JSON: {e}")
            raise AnalysisError("Analysis program returned invalid JSON")


class RemoteAnalysisClient(AnalysisClient):
    """Posts analysis requests to a remote HTTP service."""

    name = "remote"

    def __init__(self, url: Optional[str] = None, timeout: Optional[float] = None):
        """
        Initialize the remote client.

        Args:
            url: Analysis endpoint URL
            timeout: Request timeout in seconds
        """
        self.url = Config.ANALYSIS_URL if url is None else url
        self.timeout = timeout or Config.ANALYSIS_TIMEOUT
        logger.info(f"Initialized remote analysis client at {self.url or 'NOT SET'}")

    def is_configured(self) -> bool:
        return bool(self.url)

    @timer("Analysis: remote")
    def analyze(self, text: str, options: Optional[Dict[str, Any]] = None) -> Any:
        """Post the text to the analysis service and return its JSON body."""
        if not self.url:
            raise AnalysisError("ANALYSIS_URL is not configured", status_code=503)

        try:
            response = requests.post(
                self.url,
                json=self._payload(text, options),
                headers={"Content-Type": "application/json"},
                timeout=self.timeout
            )
            response.raise_for_status()
            return response.json()
        except requests.exceptions.Timeout:
            logger.error(f"Analysis service timed out after {self.timeout}s")
            raise AnalysisError(f"Analysis timed out after {self.timeout}s", status_code=504)
        except requests.exceptions.RequestException as e:
            logger.error(f"Analysis service request failed: {e}")
            raise AnalysisError(f"Analysis service request failed: {e}")
        except ValueError:
            logger.error("Analysis service returned invalid JSON")
            raise AnalysisError("Analysis service returned invalid JSON")


def create_analysis_client() -> AnalysisClient:
    """
    Factory function to create the analysis client based on configuration.

    Returns:
        An instance of AnalysisClient (command or remote)

    Raises:
        ValueError: If the backend is not supported
    """
    backend = Config.ANALYSIS_BACKEND

    logger.info(f"Creating analysis client for backend: {backend}")

    if backend == 'command':
        return CommandAnalysisClient()
    elif backend == 'remote':
        return RemoteAnalysisClient()
    else:
        raise ValueError(f"Unsupported analysis backend: {backend}")
