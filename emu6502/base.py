import collections
from emu6502.errors import Emu6502ValueError


# Register file snapshot handed out to test harnesses and debuggers
Registers = collections.namedtuple('Registers', ['a', 'x', 'y', 'sp', 'pc', 'flags'])


class Emu6502Base:
    def __init__(self):
        self._options = {}
        self.options_with_defaults = {}

    def get_option(self, arg, default=None):
        """
        Get an option

        :param arg: option name
        :type arg: str
        :param default: default value
        :type default: type of option
        :return: value of option
        :rtype: option type
        """
        if arg in self._options:
            return self._options[arg]
        return default

    def get_options(self):
        """
        Get a dictionary of all current options

        :return: options
        :rtype: dict
        """
        return self._options

    def set_options(self, **kwargs):
        """
        Sets options, with validation against options_with_defaults.
        All option keywords are converted to lowercase.

        :param kwargs: options
        :type kwargs: keyword options
        """
        for op, val in kwargs.items():
            op = op.lower()  # All option names must be lowercase
            if op not in self.options_with_defaults:
                raise Emu6502ValueError('Error: Unexpected option "%s"' % (op))
            self._options[op] = val
