"""
Configuration Module

Loads environment variables and provides configuration settings for the
Author Analysis web server.
Uses python-dotenv to load variables from a .env file for local development.
"""

import os
from pathlib import Path
from dotenv import load_dotenv

# Load environment variables from .env file (if it exists)
env_path = Path('.') / '.env'
load_dotenv(dotenv_path=env_path)

BASE_DIR = Path(__file__).resolve().parent

# Deployment presets. 'spa' hands unmatched paths to the client-side router,
# 'not_found' treats them as genuine misses.
VARIANT_DEFAULTS = {
    'spa': {
        'PORT': '8080',
        'STATIC_ROOT': 'public_html',
        'FALLBACK_FILE': 'public_html/index.html',
        'FALLBACK_STATUS': '200',
        'FALLBACK_METHODS': '*',
    },
    'not_found': {
        'PORT': '80',
        'STATIC_ROOT': 'public_html',
        'FALLBACK_FILE': 'resources/404.html',
        'FALLBACK_STATUS': '404',
        'FALLBACK_METHODS': 'GET',
    },
}


def variant_default(variant: str, key: str) -> str:
    """Return the preset value of ``key`` for ``variant`` (unknown variants use 'spa')."""
    return VARIANT_DEFAULTS.get(variant, VARIANT_DEFAULTS['spa'])[key]


def parse_methods(value: str):
    """
    Parse a comma separated method list.

    Returns:
        List of upper-cased methods, or None when any method is allowed
    """
    methods = [m.strip().upper() for m in (value or '').split(',') if m.strip()]
    if not methods or '*' in methods:
        return None
    return methods


class Config:
    """
    Configuration class for the Author Analysis web server.

    All settings can be overridden via environment variables.
    """

    # ==========================================
    # Deployment Variant
    # ==========================================

    # 'spa' or 'not_found'; selects the defaults below
    SERVER_VARIANT = os.getenv('SERVER_VARIANT', 'spa').lower()

    # ==========================================
    # Server Configuration
    # ==========================================

    HOST = os.getenv('HOST', '0.0.0.0')
    PORT = int(os.getenv('PORT', variant_default(SERVER_VARIANT, 'PORT')))

    # ==========================================
    # Routing Configuration
    # ==========================================

    # URL prefix where the analysis API is mounted
    API_PREFIX = os.getenv('API_PREFIX', '/api')

    # Directory served as static assets (relative to the project directory)
    STATIC_ROOT = os.getenv('STATIC_ROOT', variant_default(SERVER_VARIANT, 'STATIC_ROOT'))

    # File returned for any request no other route handles
    FALLBACK_FILE = os.getenv('FALLBACK_FILE', variant_default(SERVER_VARIANT, 'FALLBACK_FILE'))
    FALLBACK_STATUS = int(os.getenv('FALLBACK_STATUS', variant_default(SERVER_VARIANT, 'FALLBACK_STATUS')))

    # Methods answered by the fallback; '*' or empty means any method
    FALLBACK_METHODS = parse_methods(
        os.getenv('FALLBACK_METHODS', variant_default(SERVER_VARIANT, 'FALLBACK_METHODS'))
    )

    # ==========================================
    # Analysis Backend Configuration
    # ==========================================

    # 'command' runs a local program, 'remote' posts to an HTTP service
    ANALYSIS_BACKEND = os.getenv('ANALYSIS_BACKEND', 'command').lower()

    # Command line of the analysis program, e.g. "python analysis/main.py"
    ANALYSIS_COMMAND = os.getenv('ANALYSIS_COMMAND', '')

    # Endpoint of a remote analysis service
    ANALYSIS_URL = os.getenv('ANALYSIS_URL', '')

    # Analysis timeout (seconds)
    ANALYSIS_TIMEOUT = float(os.getenv('ANALYSIS_TIMEOUT', '60'))

    # ==========================================
    # Logging Configuration
    # ==========================================

    # Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
    LOG_LEVEL = os.getenv('LOG_LEVEL', 'INFO')

    # Server log file; empty disables file logging
    SERVER_LOG_FILE = os.getenv('SERVER_LOG_FILE', '')

    # ==========================================
    # Validation
    # ==========================================

    @classmethod
    def validate(cls):
        """
        Validate configuration values.

        Existence of the static root and fallback file is not checked here;
        see scripts/check_site.py.

        Raises:
            ValueError: If configuration is invalid
        """
        errors = []

        if cls.SERVER_VARIANT not in VARIANT_DEFAULTS:
            errors.append(
                f"SERVER_VARIANT must be one of {list(VARIANT_DEFAULTS)}, got '{cls.SERVER_VARIANT}'"
            )

        if cls.PORT <= 0 or cls.PORT > 65535:
            errors.append(f"PORT must be between 1 and 65535, got {cls.PORT}")

        if not cls.API_PREFIX.startswith('/') or cls.API_PREFIX.rstrip('/') == '':
            errors.append(f"API_PREFIX must be a non-root path starting with '/', got '{cls.API_PREFIX}'")

        if cls.FALLBACK_STATUS < 100 or cls.FALLBACK_STATUS > 599:
            errors.append(f"FALLBACK_STATUS must be a valid HTTP status, got {cls.FALLBACK_STATUS}")

        valid_backends = ['command', 'remote']
        if cls.ANALYSIS_BACKEND not in valid_backends:
            errors.append(
                f"ANALYSIS_BACKEND must be one of {valid_backends}, got '{cls.ANALYSIS_BACKEND}'"
            )

        if cls.ANALYSIS_TIMEOUT <= 0:
            errors.append(f"ANALYSIS_TIMEOUT must be positive, got {cls.ANALYSIS_TIMEOUT}")

        valid_log_levels = ['DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL']
        if cls.LOG_LEVEL.upper() not in valid_log_levels:
            errors.append(
                f"LOG_LEVEL must be one of {valid_log_levels}, got {cls.LOG_LEVEL}"
            )

        if errors:
            raise ValueError(
                "Configuration validation failed:\n" + "\n".join(f"  - {e}" for e in errors)
            )

    @classmethod
    def resolve_path(cls, value: str) -> str:
        """Resolve a configured path against the project directory."""
        path = Path(value)
        if not path.is_absolute():
            path = BASE_DIR / path
        return str(path)

    @classmethod
    def router_settings(cls):
        """
        Build the immutable settings handed to the site router.

        Returns:
            RouterSettings snapshot of the current configuration
        """
        from app.models.schemas import RouterSettings

        return RouterSettings(
            api_prefix=cls.API_PREFIX,
            static_root=cls.resolve_path(cls.STATIC_ROOT),
            fallback_file=cls.resolve_path(cls.FALLBACK_FILE),
            fallback_status=cls.FALLBACK_STATUS,
            fallback_methods=cls.FALLBACK_METHODS,
        )

    @classmethod
    def display(cls):
        """Display current configuration."""
        print("=" * 60)
        print("Author Analysis Server Configuration")
        print("=" * 60)
        print(f"Variant: {cls.SERVER_VARIANT}")
        print(f"Server: {cls.HOST}:{cls.PORT}")
        print(f"API Prefix: {cls.API_PREFIX}")
        print(f"Static Root: {cls.resolve_path(cls.STATIC_ROOT)}")
        print(f"Fallback File: {cls.resolve_path(cls.FALLBACK_FILE)} ({cls.FALLBACK_STATUS})")
        print(f"Fallback Methods: {', '.join(cls.FALLBACK_METHODS) if cls.FALLBACK_METHODS else 'any'}")
        print(f"Analysis Backend: {cls.ANALYSIS_BACKEND}")
        if cls.ANALYSIS_BACKEND == 'command':
            print(f"Analysis Command: {cls.ANALYSIS_COMMAND or 'NOT SET'}")
        elif cls.ANALYSIS_BACKEND == 'remote':
            print(f"Analysis URL: {cls.ANALYSIS_URL or 'NOT SET'}")
        print(f"Analysis Timeout: {cls.ANALYSIS_TIMEOUT}s")
        print(f"Log Level: {cls.LOG_LEVEL}")
        print("=" * 60)


# Validate configuration on import
try:
    Config.validate()
except ValueError as e:
    # Print validation errors but don't crash on import
    print(f"\n⚠️  Configuration Error:\n{e}\n")
