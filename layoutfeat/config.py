"""
Configuring feature extraction
"""

from collections import namedtuple

# pylint: disable=too-few-public-methods

DEFAULT_TAB_SIZE = 4
"columns per indentation level"


class ConfigException(Exception):
    "An extraction setting does not make sense"

    def __init__(self, msg):
        super(ConfigException, self).__init__(msg)


class ExtractionConfig(namedtuple("ExtractionConfig",
                                  ["tab_size",
                                   "file_id",
                                   "n_jobs"])):
    """
    Feature extraction options

    Parameters
    ----------
    tab_size: int
        number of columns in one level of block indentation;
        a new line indented by a whole number of these is not
        considered to be aligned with anything
    file_id: int
        value of the informational file slot for a single document;
        corpus extraction numbers documents upwards from it
    n_jobs: int (-1 or natural)
        Number of parallel jobs to run on a corpus (-1 for max
        cores). See joblib doc for details
    """
    @classmethod
    def empty(cls):
        """
        Default configuration
        """
        return cls(tab_size=DEFAULT_TAB_SIZE,
                   file_id=0,
                   n_jobs=1)

    def sanity_check(self):
        """
        Raise :py:class:`ConfigException` on nonsensical settings
        """
        if self.tab_size < 1:
            oops = "tab size must be a positive number of columns (got {})"
            raise ConfigException(oops.format(self.tab_size))
        if self.n_jobs == 0 or self.n_jobs < -1:
            oops = "number of jobs must be -1 or a natural number (got {})"
            raise ConfigException(oops.format(self.n_jobs))
        return self
