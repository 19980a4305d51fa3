from app.documents.base import BaseTextExtractor


class PlainTextAdapter(BaseTextExtractor):
    """Decodes bytes as UTF-8, replacing undecodable sequences.

    Also serves as the fallback for legacy binary .doc files, which yields
    whatever readable text the file carries.
    """

    def extract(self, data: bytes) -> str:
        return data.decode("utf-8", errors="replace")
