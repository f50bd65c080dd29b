class SSEMError(Exception):
    pass


class ProgramError(SSEMError):
    ''' A single source line could not be turned into a word '''

    description = 'invalid code'

    def __init__(self, text: str = ''):
        self.text = text
        super().__init__(f'{self.description}: {text!r}' if text else self.description)


class BadAddress(ProgramError):
    description = 'invalid code - bad address'


class BadEntry(ProgramError):
    description = 'invalid code - unrecognised entry'


class MissingOperand(ProgramError):
    description = 'invalid code - missing operand'


class ExtraOperand(ProgramError):
    description = 'invalid code - unexpected argument'


class BadOperand(ProgramError):
    description = 'invalid code - invalid operand'


class BadInstruction(ProgramError):
    description = 'invalid code - unknown instruction'


class BadMemory(ProgramError):
    description = 'invalid binary code - couldn\'t convert to integer'


class LoadError(SSEMError):
    line: int
    error: ProgramError

    def __init__(self, line: int, error: ProgramError):
        self.line = line
        self.error = error
        super().__init__(f'error on line {line}: {error}')


class RunawayProgramCounter(SSEMError):
    ci: int

    def __init__(self, ci: int):
        self.ci = ci
        super().__init__(f'CI ran away to line {ci}')
