from nessie.errors import NessieValueError


class NessieBase:
    def __init__(self):
        self._options = {}

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
        Set options.  All option keywords are converted to lowercase.

        :param kwargs: options
        :type kwargs: keyword options
        """
        for op, val in kwargs.items():
            op = op.lower()
            self.validate_option(op, val)
            self._options[op] = val

    def validate_option(self, op, val):
        """
        Hook for subclasses to reject unknown or out-of-range options.  Accepts everything.
        """
        pass


def require_option_in(op, known):
    if op not in known:
        raise NessieValueError('Error: unknown option "%s"' % op)
