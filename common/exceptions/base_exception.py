class CheckedException(Exception):
    """
    Exception that callers are expected to catch and translate
    """

    def __init__(self, message: str = ""):
        self.message = message
        super(CheckedException, self).__init__(message)

    def __str__(self):
        return self.message
