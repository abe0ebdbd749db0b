from enum import Enum


class ParameterDirection(Enum):
    INPUT = 1
    OUTPUT = 2
    INPUT_OUTPUT = 3


class Parameter:
    """
    A command parameter slot.

    INPUT parameters are bound, in declaration order, to the '?' placeholders of the
    command text. OUTPUT and INPUT_OUTPUT parameters are bound to the session
    variable of the same name (`@name`) and read back once the batch completes.
    """

    __slots__ = ('name', 'value', 'direction')

    def __init__(self, name: str, value=None, direction: ParameterDirection = ParameterDirection.INPUT):
        self.name = name
        self.value = value
        self.direction = direction

    @property
    def is_output(self) -> bool:
        return self.direction != ParameterDirection.INPUT

    def __repr__(self):
        return "Parameter(" + self.name + "=" + repr(self.value) + ", " + self.direction.name + ")"
