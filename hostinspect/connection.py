"""Handles SSH connections using paramiko.

This module provides the `Connection` class, which authenticates to a
remote host and runs commands there, one session channel per command.
"""

import errno
import logging
import socket
from logging import getLogger
from pathlib import Path

import paramiko
from paramiko import Channel, SSHClient, SSHConfig

logger = getLogger("hostinspect.connection")


class CommandError(Exception):
    """Exception raised when a remote command can't be run or fails."""

    def __init__(
        self,
        command: str,
        exitcode: int | None = None,
        output: str = "",
        reason: str = "",
    ) -> None:
        """Initializes the exception.

        Args:
            command: The command that failed.
            exitcode: The remote exit status, None if the command never ran.
            output: The combined output of the command.
            reason: A transport level description of the failure.
        """
        self.command = command
        self.exitcode = exitcode
        self.output = output
        self.reason = reason
        super().__init__(command)

    def __str__(self) -> str:
        if self.exitcode is None:
            return "command {0!r} failed: {1}".format(self.command, self.reason)
        msg = "command {0!r} exited with status {1}".format(
            self.command, self.exitcode
        )
        if self.output:
            msg += ": " + self.output.splitlines()[-1]
        return msg


class CommandTimeout(CommandError):
    """Exception raised when a remote command times out."""

    def __init__(self, command: str, timeout: float | None = None) -> None:
        super().__init__(command, reason="timed out after {0}s".format(timeout))
        self.timeout = timeout


class ConnectionClosedError(CommandError):
    """Exception raised when a command is run on a closed connection."""

    def __init__(self, command: str, hostname: str) -> None:
        super().__init__(command, reason="connection to {0} is closed".format(hostname))
        self.hostname = hostname


class Connection:
    """Manages one authenticated SSH session to a remote host."""

    __slots__ = [
        "client",
        "command_timeout",
        "hostname",
        "password",
        "port",
        "timeout",
        "username",
    ]

    def __init__(
        self,
        hostname: str,
        port: int | str = 22,
        username: str = "root",
        password: str = "",
        timeout: float = 10,
        command_timeout: float | None = 60,
    ) -> None:
        """Describes a session, `open` establishes it.

        Args:
            hostname: The hostname or IP address of the remote host.
            port: The port number to connect to.
            username: The user to authenticate as.
            password: The password, empty to use keys only.
            timeout: The ceiling for connecting and authenticating.
            command_timeout: The read timeout for a single command.
        """
        self.hostname = hostname

        try:
            self.port = int(port)
        except ValueError:
            self.port = 22

        self.username = username
        self.password = password
        self.timeout = timeout
        self.command_timeout = command_timeout
        self.client: SSHClient | None = None

    def __repr__(self) -> str:
        return f"<{self.__class__.__name__} object hostname={self.hostname} port={self.port}>"

    @property
    def is_open(self) -> bool:
        """Whether the session is established and its transport alive."""
        if self.client is None:
            return False
        transport = self.client.get_transport()
        return transport is not None and transport.is_active()

    def _ssh_options(self) -> dict:
        """Reads the `~/.ssh/config` entries for the host."""
        cfg = SSHConfig()
        try:
            with Path("~/.ssh/config").expanduser().open() as fd:
                cfg.parse(fd)
        except OSError as e:
            if e.errno != errno.ENOENT:
                logger.warning(e)
        return cfg.lookup(self.hostname)

    def open(self) -> bool:
        """Connects and authenticates to the remote host.

        Every phase (TCP connect, SSH banner, authentication) is bounded
        by `timeout`. On failure the client is discarded.

        Returns:
            True if the session is usable, False otherwise.
        """
        if self.is_open:
            return True

        opts = self._ssh_options()
        client = SSHClient()
        client.load_system_host_keys()
        client.set_missing_host_key_policy(paramiko.AutoAddPolicy())

        try:
            logger.debug("connecting to %s:%s", self.hostname, self.port)
            client.connect(
                hostname=self.hostname,
                port=self.port,
                username=self.username,
                password=self.password or None,
                key_filename=opts.get("identityfile", None),
                look_for_keys=not self.password,
                allow_agent=not self.password,
                timeout=self.timeout,
                banner_timeout=self.timeout,
                auth_timeout=self.timeout,
                sock=(
                    paramiko.ProxyCommand(opts["proxycommand"])
                    if "proxycommand" in opts
                    else None
                ),
            )
        except paramiko.AuthenticationException:
            logger.error("Authentication failed on %s as %s", self.hostname, self.username)
        except paramiko.SSHException as e:
            # host/sshd is probably not available
            logger.error("SSHException while connecting to %s: %s", self.hostname, e)
        except (socket.timeout, TimeoutError):
            logger.error(
                "Connecting to %s:%s timed out after %ss",
                self.hostname,
                self.port,
                self.timeout,
            )
        except OSError as e:
            logger.error("No valid connection to %s:%s: %s", self.hostname, self.port, e)
        else:
            self.client = client
            return True

        client.close()
        return False

    def new_session(self, command: str) -> Channel:
        """Opens a new session channel.

        All remote commands are run on a separate session to make sure
        that leftovers from the previous command do not interfere with
        the current command.

        Args:
            command: The command the session is opened for.

        Returns:
            A new session channel.

        Raises:
            CommandError: If the channel can't be opened.
        """
        logger.debug("creating new session at %s:%s", self.hostname, self.port)
        transport = self.client.get_transport() if self.client else None
        if transport is None:
            raise ConnectionClosedError(command, self.hostname)
        # paramiko complains about missing handlers otherwise
        logging.getLogger(transport.get_log_channel()).addHandler(logging.NullHandler())
        try:
            return transport.open_session()
        except (paramiko.ChannelException, paramiko.SSHException) as e:
            raise CommandError(command, reason=str(e)) from e

    @staticmethod
    def close_session(session: Channel | None = None) -> None:
        """Closes a session channel.

        Args:
            session: The session to close.
        """
        if session:
            try:
                session.close()
            except (OSError, paramiko.SSHException):
                # the session is already closed or broken
                pass

    def run_command(self, command: str) -> str:
        """Runs a command and returns its combined stdout and stderr.

        Args:
            command: The command to run.

        Returns:
            The output of the command, stripped of surrounding whitespace.

        Raises:
            ConnectionClosedError: If the connection isn't open.
            CommandTimeout: If no output arrives within `command_timeout`.
            CommandError: If the command can't be run or exits nonzero.
        """
        if not self.is_open:
            raise ConnectionClosedError(command, self.hostname)

        session = self.new_session(command)
        stdout = b""
        try:
            session.set_combine_stderr(True)
            session.settimeout(self.command_timeout)
            session.exec_command(command)
            while buffer := session.recv(4096):
                stdout += buffer
            exitcode = session.recv_exit_status()
        except socket.timeout as e:
            raise CommandTimeout(command, self.command_timeout) from e
        except paramiko.SSHException as e:
            raise CommandError(command, reason=str(e)) from e
        finally:
            self.close_session(session)

        output = stdout.decode("utf-8", "replace").strip()
        logger.debug("%s: %r exited with %s", self.hostname, command, exitcode)
        if exitcode != 0:
            raise CommandError(command, exitcode, output)
        return output

    def close(self) -> None:
        """Closes the session, closing twice or before `open` is a no-op."""
        if self.client is None:
            return
        client, self.client = self.client, None
        logger.debug("closing connection to %s:%s", self.hostname, self.port)
        try:
            client.close()
        except (OSError, paramiko.SSHException) as e:
            logger.debug("%s: %s", self.hostname, e)
