"""The closed set of fields every committee document record carries."""

from dataclasses import dataclass, field


@dataclass(frozen=True)
class FieldSpec:
    """One output field: its Hebrew key, accepted aliases and a prompt hint."""

    name: str
    hint: str = ""
    aliases: tuple[str, ...] = ()

    @property
    def source_keys(self) -> tuple[str, ...]:
        return (self.name, *self.aliases)


@dataclass(frozen=True)
class ExtractionSchema:
    """Versioned, immutable field list shared by the prompt and the normalizer."""

    version: str
    fields: tuple[FieldSpec, ...]
    decisions_field: str
    decision_fields: tuple[str, ...] = field(default_factory=tuple)

    def keys(self) -> list[str]:
        return [f.name for f in self.fields]

    def empty_fields(self) -> dict[str, str]:
        return {f.name: "" for f in self.fields}

    def field_spec(self, name: str) -> FieldSpec:
        for spec in self.fields:
            if spec.name == name:
                return spec
        raise KeyError(name)


DECISIONS_FIELD = "החלטות"

COMMITTEE_SCHEMA = ExtractionSchema(
    version="2",
    fields=(
        FieldSpec("כותרת הועדה", "הכותרת בראש המסמך"),
        FieldSpec("סוג ועדה", 'למשל "ועדת אשכול נפגעי עבודה" או "ועדה רפואית"'),
        FieldSpec("שם טופס", '"איבה", "נכות מעבודה" או "נכות כללית"'),
        FieldSpec("סניף הוועדה", 'למשל "סניף ראשי רמת גן"', aliases=("סניף הועדה", "סניף")),
        FieldSpec("שם המבוטח", "שם מלא כפי שמופיע במסמך"),
        FieldSpec("ת.ז:", "מספר של 8-9 ספרות", aliases=("ת.ז", "תעודת זהות", "מספר זהות")),
        FieldSpec("תאריך ועדה", "תאריך כינוס הוועדה"),
        FieldSpec(
            "תאריך פגיעה(רק באיבה,נכות מעבודה)",
            'רק אם קיים "תאריך האירוע:" או "תאריך פגיעה:"',
            aliases=("תאריך פגיעה",),
        ),
        FieldSpec("משתתפי הועדה", '"שם (תפקיד)" מופרדים בפסיק'),
        FieldSpec("תקופה", "תקופות הנכות"),
        FieldSpec("אבחנה", "מטבלת האבחנות, טקסט חופשי, מספר אבחנות מופרדות בפסיק"),
        FieldSpec("סעיף ליקוי", 'קוד הליקוי הפורמלי, למשל "F43" או "34א)ב("'),
        FieldSpec("אחוז הנכות הנובע מהפגיעה", "מטבלת ההחלטות"),
        FieldSpec("הערות"),
        FieldSpec("מתאריך"),
        FieldSpec("עד תאריך"),
        FieldSpec("מידת הנכות", "זמני/צמית"),
        FieldSpec("אחוז הנכות משוקלל"),
        FieldSpec("שקלול לפטור ממס"),
        FieldSpec(DECISIONS_FIELD, "רשימת החלטות, שורה לכל אבחנה"),
    ),
    decisions_field=DECISIONS_FIELD,
    decision_fields=(
        "אבחנה",
        "סעיף ליקוי",
        "אחוז הנכות",
        "מתאריך",
        "עד תאריך",
        "מידת הנכות",
        "הערות",
    ),
)
