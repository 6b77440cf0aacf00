# What it does: Defines the exceptions raised while reading repository metadata
# How it does: A small hierarchy rooted at RepoInfoError so callers can catch every resolution failure in one place. In default mode these are caught per stage by `repo_info.info`, in strict mode they reach the caller


class RepoInfoError(Exception):
    pass


class RepoNotFoundError(RepoInfoError): # No metadata directory between the start path and the filesystem root
    pass


class DecodeUnavailableError(RepoInfoError): # An object exists but cannot be inflated or parsed
    pass


class MalformedRefError(RepoInfoError): # HEAD, a ref file or a gitdir pointer does not match its grammar
    pass
