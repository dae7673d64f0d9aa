"""Fixed hunt content: QR tokens, components and clue texts.

The QR identifiers are printed on the physical codes and must never change.
"""

from scavenger_hunt.models import Clue, Component

HEDY_LAMARR_CLUE = (
    "In a place where countless feet traverse the same path, where conversations echo and "
    "minds meet, a brilliant woman once cast her light not in the spotlight of Hollywood but "
    "in the shadows of science. Her groundbreaking invention laid the foundation for "
    "wireless communication, yet her name was largely forgotten by history. Today, we honor "
    "her quiet, but luminous legacy in a spot that lies halfway between the high and the "
    "low, where many people pause but few stop. She is there, in the middle, her "
    "contribution still glowing."
)

HEDY_LAMARR_HINT = (
    "Look on the middle step of the main staircase for a small tribute to Hedy Lamarr, the "
    "woman whose invention helped create Wi-Fi, Bluetooth, and GPS."
)

EMILIE_DU_CHATELET_CLUE = (
    "Among the stillness of books, where knowledge is stored and great minds are honored, "
    "there lies a hidden gem. A woman of the 18th century, who brought Newton’s laws to "
    "life in her own words, is quietly remembered. Her legacy of brilliance transcends "
    "centuries, yet her name is often overlooked in the history of physics. Like the quiet "
    "yet essential role she played in the development of classical mechanics, her tribute "
    "lies under a vast surface of thought and learning, where knowledge flourishes and "
    "secrets are kept."
)

EMILIE_DU_CHATELET_HINT = (
    "Look beneath the table in the study or reading area, the place where minds gather to "
    "dive into the past, uncover hidden knowledge, and continue the work she helped pioneer. "
    "Her legacy is tucked away just beneath the surface, waiting to be rediscovered."
)

KIMBERLY_BRYANT_CLUE = (
    "In a space where machines hum and ideas are brought to life, a pioneer in the world of "
    "technology worked tirelessly to ensure that every voice was heard. She didn’t just "
    "code — she built an entire community of young women of color, empowering them to take "
    "charge of their futures through technology. Her work helped create an opportunity for "
    "girls everywhere to learn the language of the future: code. In this space where wires "
    "twist together and machines come to life, her legacy pulses like a heartbeat. It’s "
    "hidden in plain sight, quietly waiting for someone to find it."
)

KIMBERLY_BRYANT_HINT = (
    "Seek out the blinking light on a shared table, a small but constant sign of her work. "
    "Look behind or under it, where connections are made, just like the ones Kimberly Bryant "
    "has made for so many future tech leaders."
)

JESS_WADE_CLUE = (
    "In a space where ideas and meals are shared, a powerful scientist who writes about the "
    "overlooked stands firm. This physicist has spent her career advocating for those whose "
    "stories are often erased, bringing attention to the amazing contributions of women and "
    "people of color in STEM. She shines brightest not where people sit to eat, but where "
    "everything begins — where meals are prepared, where new energy starts, and where the "
    "next generation of great minds begins to gather. Her quiet resistance to being ignored "
    "reflects the same energy that drives change."
)

JESS_WADE_HINT = (
    "You’ll find her tribute near the food counter, not where people eat, but where the "
    "tools of nourishment are laid out. Her work is all about giving voice to those who "
    "deserve to be seen."
)

FOUR_AS_CLUE = (
    "In a place where conversations brew, ideas flow freely, and creativity is sparked by "
    "the aroma of fresh coffee, there lies a connection to four remarkable individuals whose "
    "work transcends borders and backgrounds. Afua Bruce, a trailblazing technologist, "
    "stands strong in advocating for public interest technology. Alan Turing, the brilliant "
    "mind who broke the Enigma code, helped lay the foundations for the computer age. Alice "
    "Ball, an African-American chemist, developed the first successful treatment for "
    "leprosy. And Asmaa Boujibar, a planetary scientist, has contributed to our "
    "understanding of space while advocating for diversity in science. These four "
    "powerhouses, whose work intersects with innovation and inclusion, are honored here. "
    "They all, in their own way, opened doors for others and made the world a better, more "
    "inclusive place."
)

FOUR_AS_HINT = (
    "Look at the base of the tallest tree near the café, a symbol of growth, strength, and "
    "rooting for a better future. Beneath it, find subtle symbols of the four A’s, each "
    "standing for a different person but all working towards the same goal: an inclusive and "
    "forward-thinking future in STEM."
)

FIRST_COMPONENT_ID = "hedy-lamarr"

DEFAULT_COMPONENTS: tuple[Component, ...] = (
    Component(
        id="hedy-lamarr",
        name="Hedy Lamarr",
        description="Pioneer of wireless communication technologies.",
    ),
    Component(
        id="emilie-du-chatelet",
        name="Émilie du Châtelet",
        description="Translated and explained Newton's laws of motion.",
    ),
    Component(
        id="kimberly-bryant",
        name="Kimberly Bryant",
        description="Founder of Black Girls CODE.",
    ),
    Component(
        id="jess-wade",
        name="Jess Wade",
        description="Physicist and advocate for diversity in STEM.",
    ),
    Component(
        id="4as",
        name="The 4 A's",
        description="Afua Bruce, Alan Turing, Alice Ball, and Asmaa Boujibar.",
    ),
)

# Known QR tokens in hunt order, the i-th token is displayed at the i-th component
QR_CODE_IDS: tuple[str, ...] = (
    "550e8400-e29b-41d4-a716-446655440000",
    "6ba7b810-9dad-11d1-80b4-00c04fd430c8",
    "9b1deb4d-3b7d-4bad-9bdd-2b0d7b3dcb6d",
    "1b9d6bcd-bbfd-4b2d-9b5d-ab8dfbbd4bed",
    "f47ac10b-58cc-4372-a567-0e02b2c3d479",
)

QR_CODE_MAPPINGS: dict[str, Component] = dict(zip(QR_CODE_IDS, DEFAULT_COMPONENTS, strict=True))

# Clue, hint and difficulty carried by the QR code at each component, in hunt order
CLUES_AND_HINTS: tuple[dict[str, str], ...] = (
    {"clue": HEDY_LAMARR_CLUE, "hint": HEDY_LAMARR_HINT, "difficulty": "Easy"},
    {
        "clue": EMILIE_DU_CHATELET_CLUE,
        "hint": EMILIE_DU_CHATELET_HINT,
        "difficulty": "Above Easy",
    },
    {"clue": KIMBERLY_BRYANT_CLUE, "hint": KIMBERLY_BRYANT_HINT, "difficulty": "Hard"},
    {"clue": JESS_WADE_CLUE, "hint": JESS_WADE_HINT, "difficulty": "Super Hard"},
    {
        "clue": FOUR_AS_CLUE,
        "hint": FOUR_AS_HINT,
        "difficulty": "Difficult, Slightly Easier than Super Hard",
    },
)

CLUE_SETS: tuple[Clue, ...] = (
    Clue(
        id=1,
        title="First Component",
        clue=HEDY_LAMARR_CLUE,
        hint=HEDY_LAMARR_HINT,
        alternate_clues=[HEDY_LAMARR_CLUE],
    ),
    Clue(
        id=2,
        title="Second Component",
        clue=EMILIE_DU_CHATELET_CLUE,
        hint=EMILIE_DU_CHATELET_HINT,
        alternate_clues=[EMILIE_DU_CHATELET_CLUE],
    ),
    Clue(
        id=3,
        title="Third Component",
        clue=KIMBERLY_BRYANT_CLUE,
        hint=KIMBERLY_BRYANT_HINT,
        alternate_clues=[KIMBERLY_BRYANT_CLUE],
    ),
    Clue(
        id=4,
        title="Fourth Component",
        clue=JESS_WADE_CLUE,
        hint=JESS_WADE_HINT,
        alternate_clues=[JESS_WADE_CLUE],
    ),
    Clue(
        id=5,
        title="Final Component",
        clue=FOUR_AS_CLUE,
        hint=FOUR_AS_HINT,
        alternate_clues=[FOUR_AS_CLUE],
    ),
)
