#
# Copyright (c) 2026 Wind River Systems, Inc.
#
# SPDX-License-Identifier: Apache-2.0
#

""" Exceptions raised while building and writing a mayday dump"""


class MaydayException(Exception):
    """Base mayday exception.

    Subclasses define a ``message`` template which is formatted with the
    keyword arguments given to the constructor.
    """
    message = "An unknown exception occurred."

    def __init__(self, message=None, **kwargs):
        self.kwargs = kwargs
        if not message:
            try:
                message = self.message % kwargs
            except KeyError:
                message = self.message
        self.msg = message
        super(MaydayException, self).__init__(message)

    def __str__(self):
        return self.msg


class ConfigurationNotFound(MaydayException):
    message = "Configuration file %(path)s could not be read: %(reason)s"


class InvalidConfiguration(MaydayException):
    message = "Invalid configuration in %(path)s: %(reason)s"


class InvalidArchiveName(MaydayException):
    message = "Invalid archive entry name %(name)r"


class FileCollectionError(MaydayException):
    message = "Unable to collect file %(name)s: %(reason)s"


class CommandSpawnError(MaydayException):
    message = "Unable to run command %(cmd)s: %(reason)s"


class DiscoveryError(MaydayException):
    message = "Unable to discover %(source)s: %(reason)s"


class ArchiveClosed(MaydayException):
    message = "Archive %(path)s is already closed"


class CollectionAborted(MaydayException):
    message = "Collection aborted at %(name)s: %(reason)s"

    def __init__(self, message=None, cause=None, **kwargs):
        self.cause = cause
        super(CollectionAborted, self).__init__(message, **kwargs)


class DuplicateArchiveName(MaydayException):
    message = "Archive entry %(name)s is collected more than once"
