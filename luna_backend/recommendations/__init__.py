"""
Collaborative-filtering recommendation engine.

Responsibilities:
- Read like-sets, post -> business mapping and business metadata from an
  injected interaction store.
- Score every other user against the requester by cosine similarity.
- Aggregate the top similar users' likes into per-business scores.
- Return potential friends and recommended businesses ready for API serialisation.
"""
