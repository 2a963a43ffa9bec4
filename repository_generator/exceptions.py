"""
Generator Exceptions - errors raised while generating or using repositories.

Generation preconditions raise their own exceptions rather than printing or
exiting, so the creator can be driven from the command line, from tests or from
another tool alike.
"""


class GeneratorError(Exception):
    """Base exception for all repository generator errors."""

    pass


class ModelNotFoundError(GeneratorError):
    """The model class to generate a repository for cannot be imported."""

    def __init__(self, model_namespace: str):
        self.model_namespace = model_namespace
        super().__init__(f"{model_namespace} does not exist.")


class ClassAlreadyExistsError(GeneratorError):
    """A class the generator would write is already defined."""

    def __init__(self, namespace: str):
        self.namespace = namespace
        super().__init__(f"{namespace} already exists.")


class RepositoryAlreadyExistsError(ClassAlreadyExistsError):
    pass


class ContractAlreadyExistsError(ClassAlreadyExistsError):
    pass


class InvalidModelTypeError(GeneratorError):
    """A repository was handed a record of a different model."""

    def __init__(self, expected: type, received: object):
        self.expected = expected
        self.received = received
        super().__init__(
            f"The model is not an instance of {expected.__module__}.{expected.__qualname__}."
        )
