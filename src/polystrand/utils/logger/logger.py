import threading
from datetime import datetime
from enum import Enum
import os
from .local_file_strategy import LocalFileStrategy


class Logger:
    """
    Process-wide logger for polystrand.
    Static class: call Logger.initialize() once, then Logger.log() anywhere.
    Messages are dropped until a storage strategy is set.
    """

    class LogPriority(Enum):
        DEBUG = 1
        INFO = 2
        WARNING = 3
        ERROR = 4
        CRITICAL = 5
        DEFAULT = 6

    DEFAULT_LOG_PATH = "/tmp/polystrand_logs.txt"
    LOG_PATH_ENV = "POLYSTRAND_LOG_PATH"

    is_logging_enabled = True
    log_storage_strategy = None
    minimum_priority = LogPriority.DEBUG
    _log_lock = threading.Lock()
    _strategy_lock = threading.Lock()
    _initialize_lock = threading.Lock()
    _disable_lock = threading.Lock()
    _enable_lock = threading.Lock()
    _flush_lock = threading.Lock()

    # INITIALIZE LOGGER
    @classmethod
    def initialize(cls, file_location=None):
        """
        Set the default file storage strategy if none is set yet.

        Parameters:
        file_location (str): Log file path. Falls back to $POLYSTRAND_LOG_PATH,
            then to DEFAULT_LOG_PATH.
        """
        with cls._initialize_lock:
            if cls.log_storage_strategy is None:
                if file_location is None:
                    file_location = os.getenv(cls.LOG_PATH_ENV, cls.DEFAULT_LOG_PATH)
                cls.set_log_storage_strategy(LocalFileStrategy(file_location))

                cls.log(f"Logger initialized with default file storage at {file_location}.")

    # LOG WITH MESSAGE AND PRIORITY
    @classmethod
    def log(cls, message, priority=LogPriority.DEBUG):
        """
        Store a message with the given priority.

        Parameters:
        message (str): The log message.
        priority (LogPriority): Defaults to DEBUG. Messages below
            minimum_priority are dropped.
        """
        if priority.value < cls.minimum_priority.value:
            return
        with cls._log_lock:
            if cls.is_logging_enabled and cls.log_storage_strategy:
                cls.log_storage_strategy.store_log(
                    message, priority.name, datetime.now().strftime("%Y-%m-%d %H:%M:%S")
                )

    # SET LOG STORAGE STRATEGY
    @classmethod
    def set_log_storage_strategy(cls, log_storage_strategy):
        """Replace the storage strategy (None detaches storage)."""
        with cls._strategy_lock:
            cls.log_storage_strategy = log_storage_strategy

    # SET MINIMUM PRIORITY
    @classmethod
    def set_minimum_priority(cls, priority):
        """Drop messages below `priority` (a LogPriority or its name)."""
        if isinstance(priority, str):
            priority = cls.LogPriority[priority.upper()]
        cls.minimum_priority = priority

    # FLUSH LOGS
    @classmethod
    def flush_logs(cls):
        """Clear stored logs through the storage strategy."""
        with cls._flush_lock:
            cls.log("start flush_logs()")
            if cls.is_logging_enabled and cls.log_storage_strategy:
                cls.log_storage_strategy.flush_logs()
            cls.log("end flush_logs()")

    # DISABLE LOGGING
    @classmethod
    def disable_logging(cls):
        with cls._disable_lock:
            cls.log("Logging disabled")
            cls.is_logging_enabled = False

    # ENABLE LOGGING
    @classmethod
    def enable_logging(cls):
        with cls._enable_lock:
            cls.is_logging_enabled = True
            cls.log("Logging enabled")
