'''
Exceptions for the emu6502 library
'''


class Emu6502Exception(Exception):
    """
    Generic base class for emu6502 exceptions
    """
    pass


class Emu6502ValueError(Emu6502Exception, ValueError):
    """
    Value error
    """
    pass


class UnimplementedOpcode(Emu6502Exception):
    """
    Raised when step() fetches an opcode that has no handler

    The offending byte is kept in ``opcode`` and the address it was fetched
    from in ``address`` (None if unknown).
    """
    def __init__(self, opcode, address=None):
        self.opcode = opcode
        self.address = address
        if address is None:
            msg = "Error: unimplemented opcode ${:02X}".format(opcode)
        else:
            msg = "Error: unimplemented opcode ${:02X} at ${:04X}".format(opcode, address)
        super().__init__(msg)
