# encoding: utf-8


class BBDataException(Exception):
    pass


class InvalidArgument(BBDataException, ValueError):
    '''Raised when a library function is called with an argument it can
    never accept, e.g. a blank set relation name.

    '''
    pass


class UnrecognizedEntityType(InvalidArgument):
    pass


class NotFound(BBDataException):
    pass


class RedirectCycleError(BBDataException):
    '''Raised when following entity redirects revisits a bbid or does not
    settle within the configured number of hops.

    '''
    def __init__(self, message: str, chain: 'list[str]') -> None:
        super(RedirectCycleError, self).__init__(message)
        self.chain = chain


class BBDataConfigurationException(BBDataException):
    pass
