from typing import Literal


signable_methods = Literal["GET", "HEAD", "PUT", "DELETE"]

SIGNABLE_METHODS: frozenset[str] = frozenset(signable_methods.__args__)
