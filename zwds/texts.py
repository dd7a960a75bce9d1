"""
Canned reading texts.

- DESTINY_DESCRIPTIONS: (palace name, transformation) → one-line reading
  used by the yearly activation resolver
- STAR_BODY_PARTS / HEALTH_TIPS: Health Palace star → body part → tip

Lookups that miss fall back to the placeholders below; callers log the miss.
"""

from zwds.transformations import Transformation


LU, QUAN, KE, JI = Transformation.LU, Transformation.QUAN, Transformation.KE, Transformation.JI

DESCRIPTION_PLACEHOLDER = "Description not available for this palace and transformation."
HEALTH_TIP_PLACEHOLDER = "No specific guidance recorded for this body part."


# ============================================================
# YEARLY ACTIVATION
# ============================================================

DESTINY_DESCRIPTIONS = {
    ("命宮", LU): "Personal momentum is strong; opportunities tend to find you this year.",
    ("命宮", QUAN): "A year to take charge of your own direction and make firm decisions.",
    ("命宮", KE): "Your reputation grows quietly; people notice steady, careful work.",
    ("命宮", JI): "Inner pressure runs high; slow down and avoid overcommitting yourself.",

    ("兄弟宮", LU): "Siblings and close peers bring help or shared gains.",
    ("兄弟宮", QUAN): "You may end up leading among peers; expect some friction over roles.",
    ("兄弟宮", KE): "Peer relationships are cordial and supportive.",
    ("兄弟宮", JI): "Keep money and promises with siblings or partners clearly separated.",

    ("夫妻宮", LU): "Warmth in partnership; a good year to deepen a relationship.",
    ("夫妻宮", QUAN): "Your partner's influence on your choices is larger than usual.",
    ("夫妻宮", KE): "Harmony through understanding; small gestures go a long way.",
    ("夫妻宮", JI): "Misunderstandings with a partner are likely; talk things through early.",

    ("子女宮", LU): "Children, students or creative projects bring joy and returns.",
    ("子女宮", QUAN): "You take a more directing role with children or juniors.",
    ("子女宮", KE): "Children or protégés earn recognition.",
    ("子女宮", JI): "Worries around children or creative output need patient attention.",

    ("財帛宮", LU): "Income flows more easily; a favourable year for earning.",
    ("財帛宮", QUAN): "You gain control over finances; good for active money management.",
    ("財帛宮", KE): "Finances are stable and well-planned rather than spectacular.",
    ("財帛宮", JI): "Spending outpaces income if unchecked; avoid risky investments.",

    ("疾厄宮", LU): "Vitality is good and recovery is quick.",
    ("疾厄宮", QUAN): "Energy is high; channel it into regular exercise rather than strain.",
    ("疾厄宮", KE): "Health stays steady with sensible routines.",
    ("疾厄宮", JI): "Pay attention to chronic complaints and rest when the body asks.",

    ("遷移宮", LU): "Travel and work away from home bring good fortune.",
    ("遷移宮", QUAN): "You make your mark in the outside world; public roles suit you.",
    ("遷移宮", KE): "A good name travels ahead of you; outside contacts are helpful.",
    ("遷移宮", JI): "Take extra care when travelling and with dealings far from home.",

    ("交友宮", LU): "Friends and colleagues open doors.",
    ("交友宮", QUAN): "You organise or lead groups; delegate clearly.",
    ("交友宮", KE): "Your social circle is dependable and respectful.",
    ("交友宮", JI): "Be selective about whom you trust; lending to friends is risky.",

    ("官祿宮", LU): "Career prospects improve; a good year for advancement.",
    ("官祿宮", QUAN): "More authority and responsibility at work.",
    ("官祿宮", KE): "Professional reputation rises through quality work.",
    ("官祿宮", JI): "Workplace pressure or setbacks; keep records and stay patient.",

    ("田宅宮", LU): "Home and property matters go smoothly; good for buying or settling.",
    ("田宅宮", QUAN): "You take control of household or property decisions.",
    ("田宅宮", KE): "A calm, orderly home life.",
    ("田宅宮", JI): "Repairs, moves or family disputes over property may arise.",

    ("福德宮", LU): "Contentment and enjoyment come easily.",
    ("福德宮", QUAN): "Strong personal drive; make time to unwind.",
    ("福德宮", KE): "Peace of mind through study or reflection.",
    ("福德宮", JI): "Restlessness and overthinking; protect your sleep and leisure.",

    ("父母宮", LU): "Support from parents, elders or superiors.",
    ("父母宮", QUAN): "Elders or superiors have a strong say in your affairs.",
    ("父母宮", KE): "Good standing with authority figures; paperwork goes smoothly.",
    ("父母宮", JI): "Friction with parents or superiors; watch documents and contracts.",
}


# ============================================================
# HEALTH
# ============================================================

STAR_BODY_PARTS = {
    "太陽": ("頭", "眼", "心臟", "胃"),
    "天機": ("心臟", "神經系統", "手", "腳", "胃"),
    "武曲": ("鼻", "肺", "骨"),
    "貪狼": ("骨", "生殖器", "肝臟", "腎", "筋骨"),
    "巨門": ("口", "腸"),
    "七殺": ("腸",),
    "破軍": ("腸",),
    "天同": ("耳", "膀胱"),
    "廉貞": ("血液", "生殖器", "神經系統"),
    "太陰": ("肝臟",),
    "天相": ("膝蓋",),
    "文昌": ("神經系統", "關節"),
    "文曲": ("神經系統", "關節"),
    "天梁": ("關節",),
}

# body part → (English name, tip)
HEALTH_TIPS = {
    "頭": ("Head", "Guard against headaches and overwork; keep regular sleep."),
    "眼": ("Eyes", "Rest the eyes from screens and have vision checked regularly."),
    "心臟": ("Heart", "Keep blood pressure in check with steady exercise and less salt."),
    "鼻": ("Nose", "Sinus and allergy flare-ups are possible; keep air clean and humid."),
    "肺": ("Lungs", "Avoid smoke and dust; breathing exercises help."),
    "骨": ("Bones", "Support bone strength with calcium, vitamin D and weight-bearing exercise."),
    "口": ("Mouth", "Look after teeth and gums; watch for mouth ulcers."),
    "腸": ("Intestines", "Eat regular meals with enough fibre; avoid very spicy food."),
    "耳": ("Ears", "Protect hearing from loud noise; treat ear infections promptly."),
    "膀胱": ("Bladder", "Drink enough water and do not hold urine for long."),
    "血液": ("Blood", "Check blood counts and circulation at routine examinations."),
    "生殖器": ("Reproductive System", "Keep up routine reproductive health screening."),
    "神經系統": ("Nervous System", "Manage stress and give the mind real rest."),
    "肝臟": ("Liver", "Limit alcohol and late nights."),
    "腎": ("Kidneys", "Stay hydrated and moderate salt and protein intake."),
    "筋骨": ("Tendons & Muscles", "Warm up before exercise and stretch afterwards."),
    "手": ("Hands", "Take breaks from repetitive hand work."),
    "腳": ("Feet", "Wear supportive shoes and look after circulation in the legs."),
    "膝蓋": ("Knees", "Keep weight in check and strengthen the muscles around the knees."),
    "關節": ("Joints", "Keep joints mobile with gentle, regular movement."),
    "胃": ("Stomach", "Eat at regular times and avoid overeating."),
}
