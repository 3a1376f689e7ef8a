"""Read-only language tables: supported languages and the detector's scoring profile.

The detector is generic over DETECTION_PROFILE. Adding a language means adding a
ScriptProfile or LexiconProfile here and bumping DETECTION_PROFILE_VERSION.
"""

from __future__ import annotations

import re
from types import MappingProxyType
from typing import Final

from models.language_models import DetectionProfile, LexiconProfile, ScriptProfile

__all__: list[str] = [
    "DETECTION_PROFILE",
    "DETECTION_PROFILE_VERSION",
    "SUPPORTED_LANGUAGES",
]

DETECTION_PROFILE_VERSION: Final[str] = "2024.1"

# Display order of the language picker.
SUPPORTED_LANGUAGES: Final[MappingProxyType[str, str]] = MappingProxyType(
    {
        "en": "English",
        "es": "Spanish",
        "fr": "French",
        "de": "German",
        "it": "Italian",
        "pt": "Portuguese",
        "ru": "Russian",
        "zh": "Chinese",
        "ja": "Japanese",
        "ko": "Korean",
        "ar": "Arabic",
        "hi": "Hindi",
        "tr": "Turkish",
        "nl": "Dutch",
        "pl": "Polish",
        "sv": "Swedish",
        "fi": "Finnish",
        "da": "Danish",
        "no": "Norwegian",
        "cs": "Czech",
        "el": "Greek",
        "he": "Hebrew",
        "id": "Indonesian",
        "ms": "Malay",
        "th": "Thai",
        "vi": "Vietnamese",
        "uk": "Ukrainian",
        "bg": "Bulgarian",
        "ro": "Romanian",
        "bn": "Bengali",
        "ta": "Tamil",
        "te": "Telugu",
        "hu": "Hungarian",
        "sk": "Slovak",
        "sl": "Slovenian",
        "hr": "Croatian",
        "sr": "Serbian",
        "lt": "Lithuanian",
        "lv": "Latvian",
        "et": "Estonian",
        "ha": "Hausa (Nigeria)",
        "yo": "Yoruba (Nigeria)",
        "ig": "Igbo (Nigeria)",
    }
)

_CJK: Final[str] = r"\u3400-\u4dbf\u4e00-\u9fff\uf900-\ufaff"
_KANA: Final[str] = r"\u3040-\u309f\u30a0-\u30ff\u31f0-\u31ff\uff66-\uff9f"
_CYRILLIC: Final[str] = r"\u0400-\u04ff\u0500-\u052f"


def _script(code: str, pattern: str, coverage: str | None = None, refine: tuple[str, ...] = ()) -> ScriptProfile:
    return ScriptProfile(
        code=code,
        name=SUPPORTED_LANGUAGES[code],
        pattern=re.compile(f"[{pattern}]"),
        coverage=re.compile(f"[{coverage or pattern}]"),
        refine=refine,
    )


def _lexicon(code: str, words: str, *, min_matches: int = 2, script: str = "latin") -> LexiconProfile:
    return LexiconProfile(
        code=code,
        name=SUPPORTED_LANGUAGES[code],
        words=frozenset(words.split()),
        min_matches=min_matches,
        script=script,
    )


# Evaluation order matters: kana before Han so Japanese text mixing kanji is not taken for
# Chinese, and the letter-specific Cyrillic alphabets before general Cyrillic.
_SCRIPTS: Final[tuple[ScriptProfile, ...]] = (
    _script("ja", _KANA, coverage=_KANA + _CJK),
    _script("ko", r"\uac00-\ud7af\u1100-\u11ff\u3130-\u318f"),
    _script("zh", _CJK),
    _script("ar", r"\u0600-\u06ff\u0750-\u077f\ufb50-\ufdff\ufe70-\ufefc"),
    _script("he", r"\u0590-\u05ff\ufb1d-\ufb4f"),
    _script("el", r"\u0370-\u03ff\u1f00-\u1fff"),
    _script("th", r"\u0e00-\u0e7f"),
    _script("hi", r"\u0900-\u097f"),
    _script("bn", r"\u0980-\u09ff"),
    _script("ta", r"\u0b80-\u0bff"),
    _script("te", r"\u0c00-\u0c7f"),
    _script("uk", "іїєґІЇЄҐ", coverage=_CYRILLIC),
    _script("sr", "ђјљњћџЂЈЉЊЋЏ", coverage=_CYRILLIC),
    _script("ru", _CYRILLIC, refine=("ru", "bg")),
)

_LEXICONS: Final[tuple[LexiconProfile, ...]] = (
    _lexicon(
        "en",
        "the be to of and a in that have i it for not on with he as you do at this but his by from "
        "they we say her she or an will my one all would there their what so up out if about who get "
        "which go me when is are was were has had been can could should our your its them than then "
        "these those how why where here",
    ),
    _lexicon(
        "es",
        "el la los las de que y a en un una ser se no por con su sus para como estar tener le lo todo "
        "pero más muy sin sobre también entre cuando donde porque este esta esto ese eso del al hay "
        "yo tú él ella nosotros ellos es son está están fue era",
    ),
    _lexicon(
        "fr",
        "le la les de un une être et à il avoir ne je son que se qui ce dans en du elle au aux pour "
        "pas vous par sur faire plus me on mon lui nous comme mais avec tout est sont était ont où "
        "sans tu ou leur des cette ces aussi très",
    ),
    _lexicon(
        "de",
        "der die und in den von zu das mit sich des auf für ist im dem nicht ein eine als auch es an "
        "werden aus er hat dass sie nach wird bei um am sind noch wie einem über so zum war haben nur "
        "oder aber vor zur bis mehr durch sein wurde kann wenn ich wir ihr",
    ),
    _lexicon(
        "it",
        "di a da in con su per tra il un uno una lo la i gli le e che non si è o ci mi ho sono ha "
        "hanno stato essere avere fare quando più anche tutto molto ancora io noi voi loro del della "
        "dei delle nel nella questo questa quello sempre poi però",
    ),
    _lexicon(
        "pt",
        "o a de que e do da em um para é com não uma os no se na por mais as dos como mas foi ao ele "
        "das tem à seu sua ou ser quando muito há nos já está eu também só pelo pela até isso ela "
        "entre era depois sem mesmo você",
    ),
    _lexicon(
        "nl",
        "de het een van in en is op te voor aan met zijn die dat er ook als maar om niet tot uit bij "
        "door over ze dan kan hij naar was wat worden meer heeft moet deze daar nog wie hun nu alle "
        "geen wel veel zo dit ik je",
    ),
    _lexicon(
        "pl",
        "i w na z do się nie że a o jest to od po przez co jak ale być który za dla czy tylko już jej "
        "jego przy lub też oraz ten może więc bardzo tak gdzie kiedy bez ze był była będzie jestem",
    ),
    _lexicon(
        "sv",
        "och i att det som är på en för av med den till om var han ett har inte de kan men vid så från "
        "eller hon jag vi ni sig mycket också här där när vad hur utan efter under över skulle måste "
        "detta",
    ),
    _lexicon(
        "da",
        "og i af til en at det er som på den for med han var de ikke har om et fra men ved over efter "
        "op hun kan blive skal bare ud her end denne dem dig sig meget deres eller når noget være "
        "mellem hvad jeg uden",
    ),
    _lexicon(
        "no",
        "og i av til en å på som det er for med den var at han ikke har de om et fra men ved over "
        "etter opp hun kan bli skal bare ut her enn denne dem deg seg mye deres eller når noe være "
        "mellom hva jeg uten",
    ),
    _lexicon(
        "tr",
        "bir ve bu için de da ile mi ne ki daha çok olan var gibi ben sen o biz siz onlar mı mü ama "
        "ancak veya yani çünkü eğer şey zaman sonra kadar en bile diye nasıl neden hangi kim şu öyle "
        "böyle her hiç bazı tüm bütün hep artık",
    ),
    _lexicon(
        "fi",
        "ja on ei se että oli hän ovat mutta kun niin tai myös ole olla joka mikä minä sinä me te he "
        "tämä tuo kanssa vain jo kuin jos nyt sitten vielä koska mitä miten missä olen olet",
    ),
    _lexicon(
        "cs",
        "a je se v na že to s z do o jsem jsou by jak ale pro tak jako po nebo který která které už "
        "jen bylo byl když také není mít být co ve ze od k jsme",
    ),
    _lexicon(
        "sk",
        "a je sa v na že to s z do o som sú by ako ale pre tak po alebo ktorý ktorá ktoré už len bolo "
        "bol keď tiež nie mať byť čo vo zo od k sme aj",
    ),
    _lexicon(
        "sl",
        "in je da se na za v so ki z s pa ne to tudi kot bi ali sem smo ste bo lahko še ko če samo "
        "kako kaj zelo biti imeti iz po pri od",
    ),
    _lexicon(
        "hr",
        "i je u da se na za su od s sa ne to kao ali bi ili sam smo ste bio bila biti što koji koja "
        "koje kako samo još već iz po pri jer ako kad ovo ova",
    ),
    _lexicon(
        "ro",
        "și în de la cu pe a că nu se este sunt o un din pentru care mai ca dar sau ce am ai au fost "
        "el ea noi voi ei acest această foarte fi avea când unde cum lui ale al",
    ),
    _lexicon(
        "hu",
        "a az és hogy nem is egy ez van meg de csak még már volt mint vagy mert ha kell lesz azt ezt "
        "én te ő mi ti ők nagyon itt ott amikor ahol hol miért sem pedig után között",
    ),
    _lexicon(
        "id",
        "yang dan di ke dari ini itu dengan untuk tidak ada akan dalam pada juga saya kami kita "
        "mereka anda sudah belum bisa atau tetapi karena jika seperti oleh bahwa lebih sangat adalah "
        "hanya apa siapa",
    ),
    _lexicon(
        "ms",
        "yang dan di ke dari ini itu dengan untuk tidak ada akan dalam pada juga saya kami kita "
        "mereka anda sudah boleh atau tetapi kerana jika seperti oleh bahawa lebih sangat adalah "
        "hanya apa siapa telah mahu tak sahaja awak",
    ),
    _lexicon(
        "vi",
        "và của là có không được trong một những các cho với này đã người khi để thì đến như cũng "
        "tôi bạn chúng ta anh em rất nhưng hay hoặc vì nếu từ sẽ đang ở về",
    ),
    _lexicon(
        "lt",
        "ir yra kad ne su į o bet tai kaip iš per jis ji jie aš tu mes jūs buvo bus arba dar jau tik "
        "labai kur kas ar nuo apie prie po už būti savo",
    ),
    _lexicon(
        "lv",
        "un ir ka ar uz no par kas bet tas tā es tu viņš viņa mēs jūs viņi bija būs vai ja kā kur "
        "arī jau tikai ļoti pie pēc līdz būt nav to šis šī",
    ),
    _lexicon(
        "et",
        "ja on ei et see oli ta ma sa me te nad kui aga või ka mis kes kus siis veel juba ainult väga "
        "oma olen oled oleme olla selle seda mida nii nagu kuid pole",
    ),
    _lexicon(
        "ha",
        "da na ta ya a ba ne ce su mu ku ni kai ke shi ita sun yana tana suna muna don amma kuma "
        "wannan wani wata akwai daga zuwa cikin game sai har yadda lokacin",
    ),
    _lexicon(
        "yo",
        "ni ti o si fun ati pe lati naa kan mo a won wọn ẹ ó ní sí àti pé láti náà kò ko ṣe wa jẹ bi "
        "bí ninu nínú yìí yii ohun gbogbo wá",
    ),
    _lexicon(
        "ig",
        "na ya nke ka bụ o ọ ha anyị unu m gi gị ihe ndị ndi maka mana ma nwere ebe mgbe otu dị di "
        "nile niile a e ga aga site",
    ),
    # Cyrillic lexicons only refine the script pass. Words shared by both languages
    # (и, в, на, за, не, да, по, до, с, но, от, при) are left out of both lists.
    _lexicon(
        "ru",
        "что это как он она они я мы вы был была были его её который которая уже только так все всё "
        "для же бы из у о об нет есть ещё когда чтобы если меня тебя мой",
        script="cyrillic",
    ),
    _lexicon(
        "bg",
        "е са че това като той тя ще беше съм си който която които след със във към ние вие те "
        "аз ти го ги му ѝ един една едно няма има тук",
        script="cyrillic",
    ),
)

DETECTION_PROFILE: Final[DetectionProfile] = DetectionProfile(
    version=DETECTION_PROFILE_VERSION,
    scripts=_SCRIPTS,
    lexicons=_LEXICONS,
    min_text_length=3,
    script_confidence_floor=0.7,
    min_acceptance=0.15,
    fallback_code="en",
    fallback_confidence=0.5,
    fallback_pattern=re.compile(r"^[a-zA-Z\s\d.,!?;:'\"()\-]+$", re.ASCII),
)
