from typing import Annotated

from pydantic import BeforeValidator, EmailStr

from absence_api.core.security import normalize_email

# trim + minuscules avant la vérification du format
NormalizedEmail = Annotated[EmailStr, BeforeValidator(normalize_email)]
