"""Bilingual (English/Telugu) word lists for lexicon sentiment scoring.

Entries are matched as substrings of each lowercased token, so stems such as
"disappoint" or "బాగుంది" also catch inflected forms.
"""

POSITIVE_WORDS = (
    "good", "great", "excellent", "amazing", "wonderful", "fantastic",
    "terrific", "outstanding", "superb", "awesome", "thanks", "thank",
    "appreciate", "happy", "love", "best", "congratulations", "well",
    "improvement", "improved", "better", "beautiful", "perfect", "success",
    # Telugu, transliterated
    "bagundi", "dhanyavadalu", "abhinandanalu", "manchidi",
    # Telugu script
    "అద్భుతం", "మంచి", "బాగుంది", "జయహో", "ఘనవిజయం", "విజయం", "ప్రజాసేవ",
    "నాయకత్వం", "సమర్పణ", "నిజాయితీ", "నిబద్ధత",
    "సంతోషం", "ఆనందం", "హర్షం", "శుభం", "గెలుపు", "నమ్మకం",
    "విశ్వాసం", "ధన్యవాదాలు", "శుభాకాంక్షలు", "అభినందనలు", "ప్రగతి",
    "అభివృద్ధి", "ఉన్నతి", "సాధన", "విజయోత్సవం", "సత్ఫలితం", "సంతృప్తి",
    "సమృద్ధి", "సాఫల్యం", "సహకారం", "సామరస్యం",
    "ఆదర్శం", "ఉత్తమ", "చక్కని", "సుందరమైన", "ఉత్సాహం",
    "ప్రోత్సాహం", "ప్రేరణ", "ఆశాజనక",
    "పారదర్శకత", "జవాబుదారీతనం", "సమానత్వం", "స్వేచ్ఛ", "న్యాయం",
    "సుపరిపాలన", "సంక్షేమ", "ప్రజాహితం", "జనసేవ",
)

NEGATIVE_WORDS = (
    "bad", "terrible", "horrible", "awful", "poor", "disappoint",
    "unfortunate", "sad", "unhappy", "hate", "dislike", "worst",
    "failure", "failed", "problem", "issue", "concern", "useless",
    # Telugu, transliterated
    "chedu", "baagaledhu", "cheddaga", "kashtam",
    # Telugu script
    "సమస్య", "చెడు", "బాగాలేదు", "దోచి", "దాచుకోవడం", "అవినీతి",
    "భ్రష్టాచారం", "దోపిడీ", "మోసం", "కుట్ర",
    "దుఃఖం", "బాధ", "కష్టం", "నష్టం", "విచారం", "నిరాశ", "నిస్పృహ",
    "అపజయం", "ఓటమి", "పరాభవం", "అసంతృప్తి", "ఆందోళన", "ఆవేదన",
    "కోపం", "ఆగ్రహం", "అసహనం", "నిరుత్సాహం",
    "అసమర్థత", "బలహీనత", "భయం", "వైఫల్యం",
    "అపఖ్యాతి", "అవమానం", "అగౌరవం", "అన్యాయం", "అపనిందలు",
    "దూషణ", "నిందలు", "విమర్శలు", "తప్పిదాలు", "లోపాలు", "పొరపాట్లు",
    "అక్రమాలు", "అరాచకం", "గుండాయిజం", "దౌర్జన్యం",
    "దురాగతం", "దుర్వినియోగం", "దుష్ప్రచారం",
    "కుంభకోణం", "వంచన", "లంచగొండితనం", "స్వార్థం",
    "నిరంకుశత్వం", "పక్షపాతం", "వివక్ష",
)

# Exact token matches
NEGATION_WORDS = frozenset({
    "no", "not", "never", "don't", "doesn't", "didn't", "won't", "shouldn't",
    "can't", "couldn't", "isn't", "wasn't",
    "తప్ప", "లేదు", "కాదు", "వద్దు", "కూడదు", "చేయకూడదు",
})

INTENSIFIERS = frozenset({
    "very", "extremely", "really", "absolutely", "completely", "totally",
    "చాలా", "మరింత", "అత్యంత", "పూర్తిగా", "సంపూర్ణంగా", "అమితంగా",
    "అధికంగా", "ఎక్కువగా", "మహా", "అతి", "మిక్కిలి", "గణనీయంగా",
})

POSITIVE_PHRASES = ("thank you", "thanks for")
NEGATIVE_PHRASES = ("waste of", "not worth")

HEART_EMOJI = frozenset({
    "❤", "♥", "\U0001F495", "\U0001F496", "\U0001F497", "\U0001F493",
    "\U0001F49E", "\U0001F498", "\U0001F49D", "\U0001F499", "\U0001F49A",
    "\U0001F49B", "\U0001F49C", "\U0001F9E1", "\U0001F90D", "\U0001F60D",
    "\U0001F970", "\U0001F618", "\U0001F63B",
})

POSITIVE_EMOJI = frozenset({
    "\U0001F525",  # fire
    "\U0001F44D",  # thumbs up
    "\U0001F44F",  # clapping hands
    "\U0001F64F",  # folded hands
    "\U0001F4AF",  # hundred points
    "\U0001F389",  # party popper
    "\U0001F60A", "\U0001F600", "\U0001F601", "\U0001F603", "\U0001F604",
    "\U0001F44C",  # ok hand
    "\U0001F64C",  # raising hands
    "✨",      # sparkles
    "\U0001F4AA",  # flexed biceps
    "\U0001F3C6",  # trophy
    "⭐", "\U0001F31F", "\U0001F929", "\U0001F60E",
})
