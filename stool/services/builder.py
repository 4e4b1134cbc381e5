"""Session script builder.

Turns a ConnectionPlan into the exact process to run:

- key file and default authentication run ``ssh``/``scp`` directly
- password authentication runs the same command under ``expect``, with a
  generated script that answers the host-key and password prompts

Every value placed in the expect script is Tcl-quoted.
"""

import logging
import os
import shutil
from collections.abc import Callable
from pathlib import Path

from stool.config.settings import Settings
from stool.errors import InvalidInput, ToolMissing
from stool.models import (
    AutomationScript,
    ConnectionPlan,
    Default,
    Download,
    Invocation,
    KeyFile,
    Operation,
    Password,
    Secret,
    Shell,
    Upload,
)
from stool.utils.shell import tcl_escape, tcl_list
from stool.utils.validation import validate_remote_path

logger = logging.getLogger(__name__)

# OpenSSH: "Are you sure you want to continue connecting (yes/no/[fingerprint])?"
HOST_KEY_PATTERN = r"continue connecting \(yes/no"
PASSWORD_PATTERN = r"[Pp]assword:"
# ssh's own rejection messages; "scp: <file>: Permission denied" is not one
AUTH_REJECTED_PATTERN = r"Permission denied[ ,.][^\r\n]*"
CONNECT_FAILED_PATTERN = (
    r"(Connection timed out|Operation timed out|Connection refused|No route to host"
    r"|Network is unreachable|Could not resolve hostname|Connection closed by"
    r"|Connection reset by)[^\r\n]*"
)

_PROLOGUE = """\
set timeout %(timeout)d
log_user 1
set host_key_answered 0
spawn -noecho %(command)s
expect {
    -re {%(host_key_pattern)s} {
%(host_key_action)s
    }
    -re {%(password_pattern)s} {
        send -- "%(secret)s\\r"
    }
    -re {%(auth_pattern)s} {
        send_error "$expect_out(0,string)\\n"
        exit 255
    }
    -re {%(connect_pattern)s} {
        send_error "$expect_out(0,string)\\n"
        exit 255
    }
    timeout {%(timeout_action)s}
    eof {
        catch wait result
        exit [lindex $result 3]
    }
}
"""

# No prompt yet is not a failure: key or agent auth may already have logged in.
# A shell hands over to interact; a copy keeps waiting for a prompt or EOF.
_SHELL_NO_PROMPT = ""
_COPY_NO_PROMPT = " exp_continue "

_ACCEPT_HOST_KEY = """\
        if {$host_key_answered} {
            send_error "Host key verification failed: repeated host key prompt for %(address)s\\n"
            exit 255
        }
        set host_key_answered 1
        send -- "yes\\r"
        exp_continue"""

_REFUSE_HOST_KEY = """\
        send_error "Host key verification failed: unknown host key for %(address)s\\n"
        exit 255"""

# After the secret: a second password prompt means it was rejected
_REJECTED = """\
    -re {%(password_pattern)s} {
        send_error "Permission denied, please try again.\\n"
        exit 255
    }
    -re {%(auth_pattern)s} {
        send_error "$expect_out(0,string)\\n"
        exit 255
    }"""

_SHELL_EPILOGUE = """\
expect {
%(rejected)s
    -re {\\S} {}
    timeout {}
}
interact
catch wait result
exit [lindex $result 3]
"""

_COPY_EPILOGUE = """\
set timeout -1
expect {
%(rejected)s
    eof {}
}
catch wait result
exit [lindex $result 3]
"""


class SessionScriptBuilder:
    """Builds subprocess invocations from connection plans."""

    def __init__(
        self,
        settings: Settings,
        strict_host_keys: bool = False,
        which: Callable[[str], str | None] = shutil.which,
    ):
        """Initialize builder.

        Args:
            settings: Tool names, transfer defaults and prompt timeout
            strict_host_keys: Refuse unknown host keys in password sessions
            which: PATH lookup, replaceable in tests
        """
        self.settings = settings
        self.strict_host_keys = strict_host_keys
        self._which = which

    def build(self, plan: ConnectionPlan) -> Invocation:
        """Build the invocation for a plan.

        Args:
            plan: Resolved connection plan

        Returns:
            Invocation to hand to the session executor

        Raises:
            ToolMissing: If ssh, scp or expect is not on PATH
            InvalidInput: If the operation's paths are unusable
        """
        operation = self._resolve_operation(plan.operation)
        tool = self.settings.ssh_bin if isinstance(operation, Shell) else self.settings.scp_bin
        self._require(tool)

        command = [tool]
        auth = plan.auth
        if isinstance(auth, KeyFile):
            command += ["-i", auth.path]
        elif not isinstance(auth, (Password, Default)):
            raise TypeError(f"Unknown auth mode: {type(auth).__name__}")
        command += self._operation_args(plan, operation)

        if not isinstance(auth, Password):
            logger.debug("Built direct %s invocation for %s", tool, plan.display)
            return Invocation(
                argv=command,
                operation=operation,
                display=plan.display,
                interactive=isinstance(operation, Shell),
            )

        self._require(self.settings.expect_bin)
        script = self._automation_script(plan, operation, command, auth.secret)
        logger.debug("Built expect invocation for %s", plan.display)
        return Invocation(
            argv=[self.settings.expect_bin, "-c", script.text],
            operation=operation,
            display=plan.display,
            script=script,
            interactive=isinstance(operation, Shell),
        )

    def _require(self, tool: str) -> None:
        if self._which(tool) is None:
            raise ToolMissing(tool)

    def _resolve_operation(self, operation: Operation) -> Operation:
        """Validate paths and apply transfer defaults."""
        if isinstance(operation, Shell):
            return operation

        if isinstance(operation, Upload):
            if not operation.local_path.strip():
                raise InvalidInput("Local path is required for upload")
            local = Path(operation.local_path.strip()).expanduser()
            if not local.exists():
                raise InvalidInput(f"Local path not found: {local}")
            remote = operation.remote_path.strip() or self.settings.upload_dir
            return Upload(local_path=str(local), remote_path=self._remote(remote))

        if isinstance(operation, Download):
            if not operation.remote_path.strip():
                raise InvalidInput("Remote path is required for download")
            remote = self._remote(operation.remote_path)
            local_input = operation.local_path.strip()
            local = Path(local_input or self.settings.download_dir).expanduser()
            if not local_input and not local.exists():
                logger.info("Creating download directory %s", local)
                try:
                    local.mkdir(parents=True, exist_ok=True)
                except OSError as e:
                    raise InvalidInput(f"Cannot create download directory {local}: {e}") from e
            return Download(remote_path=remote, local_path=str(local))

        raise TypeError(f"Unknown operation: {type(operation).__name__}")

    @staticmethod
    def _remote(path: str) -> str:
        try:
            return validate_remote_path(path)
        except ValueError as e:
            raise InvalidInput(str(e)) from e

    @staticmethod
    def _operation_args(plan: ConnectionPlan, operation: Operation) -> list[str]:
        """Arguments after the credential flags."""
        if isinstance(operation, Shell):
            args = ["-p", str(plan.port)] if plan.port != 22 else []
            return args + [plan.destination]

        args = ["-P", str(plan.port)] if plan.port != 22 else []
        # scp needs brackets around IPv6 addresses in user@host:path
        host = f"[{plan.address}]" if ":" in plan.address else plan.address
        remote_prefix = f"{plan.user}@{host}:"

        if isinstance(operation, Upload):
            if os.path.isdir(operation.local_path):
                args.append("-r")
            return args + ["--", operation.local_path, remote_prefix + operation.remote_path]
        if isinstance(operation, Download):
            return args + ["--", remote_prefix + operation.remote_path, operation.local_path]
        raise TypeError(f"Unknown operation: {type(operation).__name__}")

    def _automation_script(
        self,
        plan: ConnectionPlan,
        operation: Operation,
        command: list[str],
        secret: Secret,
    ) -> AutomationScript:
        """Generate the expect program for a password session."""
        address = tcl_escape(plan.display)
        values = {
            "address": address,
            "password_pattern": PASSWORD_PATTERN,
            "auth_pattern": AUTH_REJECTED_PATTERN,
        }
        host_key_action = (_REFUSE_HOST_KEY if self.strict_host_keys else _ACCEPT_HOST_KEY) % values
        rejected = _REJECTED % values
        if isinstance(operation, Shell):
            epilogue, timeout_action = _SHELL_EPILOGUE, _SHELL_NO_PROMPT
        else:
            epilogue, timeout_action = _COPY_EPILOGUE, _COPY_NO_PROMPT

        text = _PROLOGUE % {
            **values,
            "timeout": self.settings.prompt_timeout,
            "command": tcl_list(command),
            "host_key_pattern": HOST_KEY_PATTERN,
            "host_key_action": host_key_action,
            "timeout_action": timeout_action,
            "connect_pattern": CONNECT_FAILED_PATTERN,
            "secret": tcl_escape(secret.reveal()),
        } + epilogue % {"rejected": rejected}

        return AutomationScript(
            text=text,
            spawn_argv=command,
            host_key_pattern=HOST_KEY_PATTERN,
            password_pattern=PASSWORD_PATTERN,
        )
