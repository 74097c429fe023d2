from enum import Enum


class CalendarLabel(str, Enum):
    """What a payment covers. Declaration order is the display order."""

    INSCRIPTION = "INSCRIPTION"
    REINSCRIPTION = "REINSCRIPTION"
    FOURNITURE = "FOURNITURE"
    TENUE = "TENUE"
    POLO = "POLO"
    POLO_DE_SPORT = "POLO DE SPORT"
    SEPTEMBRE = "Septembre"
    OCTOBRE = "Octobre"
    NOVEMBRE = "Novembre"
    DECEMBRE = "Décembre"
    JANVIER = "Janvier"
    FEVRIER = "Février"
    MARS = "Mars"
    AVRIL = "Avril"
    MAI = "Mai"


# Calendar month number -> school month label (June to August have none)
SCHOOL_MONTHS = {
    9: CalendarLabel.SEPTEMBRE,
    10: CalendarLabel.OCTOBRE,
    11: CalendarLabel.NOVEMBRE,
    12: CalendarLabel.DECEMBRE,
    1: CalendarLabel.JANVIER,
    2: CalendarLabel.FEVRIER,
    3: CalendarLabel.MARS,
    4: CalendarLabel.AVRIL,
    5: CalendarLabel.MAI,
}


class ClassLabel(str, Enum):
    ANS_2 = "2ANS"
    ANS_3 = "3ANS"
    ANS_4 = "4ANS"
    ANS_5 = "5ANS"
    CP1 = "CP1"
    CP2 = "CP2"
    CE1 = "CE1"
    CE2 = "CE2"
    CM1 = "CM1"
    CM2 = "CM2"


class PaymentMethod(str, Enum):
    CASH = "cash"
    TRANSFER = "transfer"
    CHECK = "check"
    MOBILE = "mobile"


PAYMENT_METHOD_LABELS = {
    PaymentMethod.CASH: "Espèces",
    PaymentMethod.TRANSFER: "Virement bancaire",
    PaymentMethod.CHECK: "Chèque",
    PaymentMethod.MOBILE: "Mobile Money",
}


class PaymentStatus(str, Enum):
    unpaid = "unpaid"
    partial = "partial"
    paid = "paid"


PAYMENT_STATUS_LABELS = {
    PaymentStatus.paid: "Payé",
    PaymentStatus.partial: "Partiel",
    PaymentStatus.unpaid: "Non payé",
}
