class LogStorageStrategy:
    """
    Interface for log storage backends.
    """
    # STORE LOG WITH MESSAGE PRIORITY AND TIMESTAMP
    def store_log(self, message, priority, timestamp):
        """
        Store one log entry.

        Parameters:
        message (str): The log message.
        priority (str): Priority name, e.g. "WARNING".
        timestamp (str): Formatted timestamp.
        """
        raise NotImplementedError()

    # FLUSHES ALL STORED LOGS
    def flush_logs(self):
        raise NotImplementedError()
