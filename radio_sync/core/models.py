from dataclasses import dataclass


@dataclass
class ResolvedTrack:
    """
    Catalog track matched to a search query (first search result).

    - id     : Spotify track id
    - name   : track title as stored in the catalog
    - artist : comma-joined artist names
    - query  : the query that produced this match
    """

    id: str
    name: str
    artist: str
    query: str

    @property
    def uri(self) -> str:
        return f"spotify:track:{self.id}"
