"""
Module for common storage and functions.
"""
import json
import sys
import traceback
from contextlib import contextmanager
from datetime import datetime, timezone
from typing import Optional

import jq
import yaml

from .config.config import Config
from .resource import NULL_PLACEHOLDER


def datetime_hack(x):
    """
    JSON dumper hack, as the base implementation of datetime doesn't understand how to convert it to JSON.

    Parameters
    ----------
    x : object
        The object the JSON dumper could not handle.

    Returns
    -------
    str
        The ISO representation of the datetime object.

    Raises
    ------
    TypeError
        If x is not a datetime.datetime object.
    """
    if isinstance(x, datetime):
        return x.isoformat()
    raise TypeError("Unknown type")


class Common:
    """
    Namespace class for common features used by arns.

    Attributes
    ----------
    Configuration : arns.config.config.Config
        The arns configuration. None until initialize() is called.
    _logholder : arns.common.LogHolder
        The log stash object. Held in memory only until initialize() is called.
    jqc : dict
        JQ cache. Stores compiled JQ objects keyed by JQ statement.
    initialized : bool
        Whether Common was initialized.
    """

    Configuration: Optional[Config] = None
    _logholder = None
    jqc = {}
    initialized = False

    @classmethod
    def initialize(cls, path=None):
        """
        Initialize Common.

        Parameters
        ----------
        path : str
            The configuration directory, if not default.
        """
        if cls.initialized:
            return
        cls.Configuration = Config(path)
        cls.Configuration.initialize()
        cls._logholder = LogHolder(cls.confdir() / "log.yaml")
        cls.initialized = True

    @classmethod
    def confdir(cls):
        """
        Returns the configuration directory.

        Returns
        -------
        pathlib.Path
            The configuration directory of the loaded configuration.
        """
        return cls.Configuration.path

    @classmethod
    def logholder(cls):
        """
        Returns the log stash. Creates an in-memory one if Common is not initialized.

        Returns
        -------
        arns.common.LogHolder
            The log stash.
        """
        if cls._logholder is None:
            cls._logholder = LogHolder()
        return cls._logholder

    @classmethod
    def placeholder(cls):
        """
        Returns the configured text for rendering absent resource fields.

        Falls back to NULL_PLACEHOLDER if not configured or if the configured value is not a string.

        Returns
        -------
        str
            The placeholder text.
        """
        if cls.Configuration is None or "null_placeholder" not in cls.Configuration:
            return NULL_PLACEHOLDER
        placeholder = cls.Configuration["null_placeholder"]
        if not isinstance(placeholder, str):
            return NULL_PLACEHOLDER
        return placeholder

    @classmethod
    def deferred_logging(cls):
        """
        Shorthand for logholder().deferred_writes().

        Returns
        -------
        contextlib.AbstractContextManager
            Context manager which holds back disk writes of the log stash until exited.
        """
        return cls.logholder().deferred_writes()

    @classmethod
    def jq(cls, stmt):
        """
        Creates a compiled JQ object, or fetches from cache if it exists.

        Parameters
        ----------
        stmt : str
            The JQ statement to compile.

        Returns
        -------
        jq._Program
            The compiled JQ statement.
        """
        if stmt not in cls.jqc:
            cls.jqc[stmt] = jq.compile(stmt)
        return cls.jqc[stmt]

    @classmethod
    def info(cls, message):
        """
        Prints an informational message to stderr.

        Parameters
        ----------
        message : str
            The message to print.
        """
        print(message, file=sys.stderr)

    @classmethod
    def log(
        cls,
        message,
        summary,
        category,
        message_type,
        subcategory=None,
        resource=None,
        **kwargs,
    ):
        """
        Logs a message to the log stash and saves it to disk.

        Parameters
        ----------
        message : str
            The full message to log.
        summary : str
            A short summary of the event being logged.
        category : str
            The category of the logged event.
        message_type : str
            The message type. Severity, but simpler. Expects one of "success", "info" or "error".
        subcategory : str
            The subcategory of the logged event.
        resource : str
            The raw resource string which triggered the event.
        kwargs : dict
            Any additional keyword arguments will be logged as context for the event.
        """
        cls.logholder().log(
            message,
            summary,
            category,
            message_type,
            subcategory=subcategory,
            resource=resource,
            **kwargs,
        )

    @classmethod
    def error(
        cls,
        message,
        summary,
        category,
        subcategory=None,
        resource=None,
        **kwargs,
    ):
        """
        Shorthand for log(message_type="error").

        See documentation of Common.log() for parameter descriptions.
        """
        cls.log(
            message,
            summary,
            category,
            "error",
            subcategory=subcategory,
            resource=resource,
            **kwargs,
        )

    @classmethod
    def log_exception(
        cls,
        exception,
        category,
        subcategory=None,
        resource=None,
        **kwargs,
    ):
        """
        Shorthand for error(message=str(exception), summary=type(exception)). Also logs traceback.

        See documentation of Common.log() for parameter descriptions.

        Parameters
        ----------
        exception : Exception
            Any exception object.
        """
        trace = "".join(traceback.format_tb(exception.__traceback__))
        cls.error(
            f"{str(exception)}\nTraceback:\n{trace}",
            type(exception).__name__,
            category,
            subcategory=subcategory,
            resource=resource,
            **kwargs,
        )


class LogHolder:
    """
    Log stash object. Contains a list of log messages from this and past runs. Interacts with the log storage yaml file to store and reload
    log messages.

    Does not need to be instantiated, Common holds an instance of this.

    Attributes
    ----------
    file_path : pathlib.Path
        The log storage yaml file. If None, entries are only kept in memory.
    raw_entries : list(dict)
        A list of raw log entries, newest first.
    deferred : bool
        Whether disk writes are currently held back by deferred_writes().
    """

    def __init__(self, file_path=None):
        self.file_path = file_path
        self.raw_entries = []
        self.deferred = False
        self.parse_log_messages()

    @contextmanager
    def deferred_writes(self):
        """
        Holds back writing the log storage file while the context is active, then writes it once on exit.

        Nested use only writes when the outermost context exits.
        """
        if self.deferred:
            yield self
            return
        self.deferred = True
        try:
            yield self
        finally:
            self.deferred = False
            self.write_raw_entries()

    def parse_log_messages(self):
        """
        Reads all raw entries from the disk storage and loads it into raw_entries.
        """
        if self.file_path is not None and self.file_path.exists():
            with self.file_path.open("r", encoding="utf-8") as file:
                self.raw_entries = yaml.safe_load(file.read()) or []
        else:
            self.raw_entries = []

    def write_raw_entries(self):
        """
        Writes the loaded raw entries to disk. Expunges log entries that go over log retention limits on lines or age.
        """
        if self.file_path is None or self.deferred:
            return
        max_idx = len(self.raw_entries)
        if Common.Configuration is not None and "log_retention" in Common.Configuration:
            retention = Common.Configuration["log_retention"] or {}
            limit = retention.get("max_lines", -1)
            if limit > 0:
                max_idx = min(limit, max_idx)
            age_limit = retention.get("max_age", -1)
            now = datetime.now(timezone.utc).timestamp()
            if age_limit > 0:
                for idx, raw_entry in enumerate(self.raw_entries[:max_idx]):
                    if now - raw_entry["timestamp"] > age_limit:
                        max_idx = idx
                        break

        self.raw_entries = self.raw_entries[:max_idx]

        with self.file_path.open("w", encoding="utf-8") as file:
            file.write(yaml.dump(self.raw_entries))

    def log(
        self,
        message,
        summary,
        category,
        message_type,
        subcategory=None,
        resource=None,
        **kwargs,
    ):
        """
        Adds a new log message to the log stash.

        See the documentation of Common.log() for the documentation of the parameters.
        """
        self.raw_entries.insert(
            0,
            {
                "summary": summary,
                "category": category,
                "subcategory": subcategory,
                "type": message_type,
                "message": message,
                "resource": resource,
                "timestamp": datetime.now(timezone.utc).timestamp(),
                "context": json.dumps(kwargs, default=datetime_hack),
            },
        )
        self.write_raw_entries()
