"""Exceptions raised by the SQLScratch command pipeline."""


class SqlScratchError(Exception):
    """Base class for SQLScratch errors."""


class StatementNotFound(SqlScratchError):
    """No statement or table name could be located around the cursor."""


class OperationCancelled(SqlScratchError):
    """The user dismissed a prompt; the whole operation is abandoned."""


class InterpreterInvocationError(SqlScratchError):
    """The external SQL interpreter process could not be started."""

    def __init__(self, command, reason):
        self.command = command
        self.reason = reason
        super().__init__(f"Could not start {command}: {reason}")
