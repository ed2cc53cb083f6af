from typing import Annotated, Union

from pydantic import Field

from .linkedin_profile import LinkedInProfile
from .instagram_profile import InstagramProfile

ProfileRecord = Annotated[Union[LinkedInProfile, InstagramProfile], Field(discriminator="platform")]

__all__ = [
    "LinkedInProfile",
    "InstagramProfile",
    "ProfileRecord",
]
