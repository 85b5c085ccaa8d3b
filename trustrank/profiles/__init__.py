"""TrustRank – Profiles subsystem package.

This package contains the profile snapshot types, the feature
vocabularies used for encoding, the profile wire codec and the
read-only profile store interface.
"""

from trustrank.profiles.types import Education, Profile
from trustrank.profiles.vocabulary import DEFAULT_VOCABULARY, FeatureVocabulary
from trustrank.profiles.codec import decode_profile, encode_profile
from trustrank.profiles.storage import InMemoryProfileStore, ProfileStore
