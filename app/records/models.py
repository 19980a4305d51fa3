import json
from dataclasses import dataclass


@dataclass(frozen=True)
class ArchivalField:
    """One column of the archival record schema."""

    key: str
    header: str
    description: str


ARCHIVAL_FIELDS: tuple[ArchivalField, ...] = (
    ArchivalField("identifikator", "Identifikator", "Unique identifier, e.g., HR-DAVŽ-69"),
    ArchivalField("naslov", "Naslov", "Title or name of the archival record"),
    ArchivalField("razina", "Razina", "Level: Fond, serija, podserija, or komad"),
    ArchivalField("visaID", "VisaID", "Higher level ID reference"),
    ArchivalField("redoslijed", "Redoslijed", "Order or sequence number"),
    ArchivalField("vrijemeOd", "VrijemeOd", "Start date/year"),
    ArchivalField("vrijemeDo", "VrijemeDo", "End date/year"),
    ArchivalField("sadrzaj", "Sadrzaj", "Content description"),
    ArchivalField("napomena", "Napomena", "Notes or remarks"),
    ArchivalField("kolicina", "Količina", "Quantity, e.g., 19 knjiga"),
    ArchivalField(
        "brojTehnickeJedinice",
        "Broj tehničke jedinice",
        "Technical unit number, e.g., kut. br. 2",
    ),
    ArchivalField("jezik1", "Jezik1", "Primary language"),
    ArchivalField("jezik2", "Jezik2", "Secondary language"),
    ArchivalField("pismo1", "Pismo1", "Primary script"),
    ArchivalField("pismo2", "Pismo2", "Secondary script"),
    ArchivalField("vrstaGradje", "VrstaGradje", "Type of material"),
    ArchivalField("vrstaZapisa", "VrstaZapisa", "Type of record"),
    ArchivalField("vrstaSadrzaja", "VrstaSadrzaja", "Type of content"),
    ArchivalField("institucija", "Institucija", "Institution code"),
    ArchivalField("statusZapisa", "StatusZapisa", "Record status"),
    ArchivalField("zaObjavu", "ZaObjavu", "Publication status"),
    ArchivalField("uvjetiKoristenja", "Uvjeti koristenja", "Terms of use URL"),
)

FIELD_KEYS: tuple[str, ...] = tuple(f.key for f in ARCHIVAL_FIELDS)


def record_schema_example() -> str:
    """Render the ``{"records": [...]}`` shape the model is asked to produce."""
    record = {f.key: f"string ({f.description})" for f in ARCHIVAL_FIELDS}
    return json.dumps({"records": [record]}, ensure_ascii=False, indent=2)
