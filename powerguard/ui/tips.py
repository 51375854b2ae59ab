"""Static power-outage safety tips."""
from PyQt5.QtWidgets import QWidget, QVBoxLayout, QLabel, QScrollArea
from typing import List, Tuple

SAFETY_TIPS: List[Tuple[str, List[str]]] = [
    ("Before an Outage", [
        "Create an emergency kit with flashlights, batteries, and first aid supplies",
        "Keep a supply of non-perishable food and bottled water",
        "Maintain a list of emergency contacts and important phone numbers",
        "Consider purchasing a backup power generator if you live in a high-risk area",
        "Sign up for emergency alerts from your local utility company",
    ]),
    ("During an Outage", [
        "Use flashlights instead of candles to reduce fire risk",
        "Keep refrigerator and freezer doors closed to maintain temperature",
        "Unplug sensitive electronics to protect from power surges when electricity returns",
        "Use power banks to keep essential devices charged",
        "Stay informed about restoration efforts through battery-powered radios or mobile devices",
    ]),
    ("Protecting Electronics", [
        "Use surge protectors for valuable electronics",
        "Turn off and unplug sensitive equipment",
        "Consider using a UPS (Uninterruptible Power Supply) for computers",
        "Keep battery packs fully charged when severe weather is forecast",
        "Back up important data regularly to cloud storage",
    ]),
    ("Communication", [
        "Conserve mobile phone battery by reducing screen brightness",
        "Use text messages instead of calls (they use less battery and bandwidth)",
        "Consider a hand-crank or solar charger for emergency use",
        "Keep car chargers available for mobile devices",
    ]),
    ("Food Safety", [
        "Keep refrigerator doors closed (food stays cold for about 4 hours)",
        "Freezers maintain temperature for about 48 hours if full and unopened",
        "Use a food thermometer to check items - discard anything above 40°F (4°C)",
        "Have coolers and ice ready to preserve important items",
        "Consume perishable items first before they spoil",
    ]),
    ("Water Safety", [
        "Store at least one gallon of water per person per day for several days",
        "If water supply is affected, use bottled water for drinking and cooking",
        "Know how to manually operate well pumps if applicable",
        "Fill bathtubs before a major storm for non-potable water reserves",
        "Have water purification tablets or filters available",
    ]),
    ("Medical Needs", [
        "Keep a backup supply of critical medications",
        "Have a plan for medical devices that require electricity",
        "Know the location of nearest medical facilities with backup power",
        "Consider registering with utility companies if you have critical medical equipment",
    ]),
]


class TipsTab(QScrollArea):
    """Scrollable list of the safety tips, grouped by section."""

    def __init__(self) -> None:
        super().__init__()
        self.setWidgetResizable(True)

        content = QWidget()
        layout = QVBoxLayout()
        layout.setContentsMargins(5, 10, 5, 5)
        content.setLayout(layout)

        for title, tips in SAFETY_TIPS:
            layout.addWidget(QLabel(f"<b>{title}</b>"))
            for tip in tips:
                label = QLabel(f"• {tip}")
                label.setWordWrap(True)
                layout.addWidget(label)
            layout.addSpacing(10)

        layout.addStretch()
        self.setWidget(content)
