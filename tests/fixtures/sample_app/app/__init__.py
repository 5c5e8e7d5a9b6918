"""Sample application inspected by the test suite."""

print("sample app booting")

from app.models import (  # noqa: E402, F401
    comment,
    invoice,
    post,
    profile,
    role,
    strict,
    user,
)
from app.models.accounts import holding, ira_account  # noqa: E402, F401
