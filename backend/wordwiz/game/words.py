from __future__ import annotations

# Local dictionary, checked before any remote lookup. Lower-case, 3+ letters.
WORD_LIST: tuple[str, ...] = (
    "cat", "dog", "bat", "hat", "rat", "mat", "sun", "fun", "run", "gun",
    "pen", "hen", "ten", "men", "den", "car", "bar", "jar", "tar", "war",
    "cup", "pup", "top", "hop", "mop", "pop", "bed", "red", "fed", "led",
    "box", "fox", "mix", "fix", "six", "bag", "tag", "rag", "wag", "lag",
    "map", "tap", "cap", "gap", "nap", "sit", "hit", "bit", "fit", "kit",
    "hot", "not", "pot", "dot", "lot", "big", "dig", "fig", "jig", "pig",
    "book", "cook", "look", "took", "hook", "love", "dove", "move", "cove", "wove",
    "time", "dime", "lime", "mime", "game", "name", "same", "tame", "fame", "came",
    "hope", "rope", "cope", "dope", "mope", "bike", "hike", "like", "mike", "pike",
    "fire", "wire", "tire", "dire", "hire", "make", "take", "wake", "bake", "cake",
    "fish", "dish", "wish", "tree", "free", "flee", "knee", "star", "scar", "char",
    "blue", "glue", "true", "clue", "moon", "soon", "noon", "boon", "door", "poor",
    "mind", "kind", "find", "wind", "bind", "walk", "talk", "milk", "silk", "gift",
    "king", "ring", "sing", "wing", "ding", "fast", "last", "past", "cast", "mast",
    "play", "clay", "gray", "pray", "stay", "song", "long", "gong", "kong", "pong",
    "happy", "sunny", "funny", "bunny", "money", "honey", "dance", "lance", "prance", "glance",
    "table", "cable", "fable", "gable", "light", "night", "fight", "might", "sight", "right",
    "green", "queen", "sheen", "small", "trail", "snail", "brain", "train", "grain", "drain",
    "beach", "teach", "reach", "peach", "world", "bread", "dread", "tread", "magic", "basic",
    "brave", "grave", "shave", "crave", "story", "glory", "fruit", "smart", "start", "chart",
    "party", "heart", "paint", "point", "joint", "grand", "brand", "stand", "plant", "grant",
    "catch", "watch", "patch", "match", "batch", "think", "drink", "blink", "stink", "clink",
    "fresh", "flesh", "sweet", "sleep", "steep", "creep", "sweep", "brown", "crown", "drown",
    "spark", "shark", "stark", "clear", "spear", "shear", "dream", "cream", "steam", "gleam",
    "smile", "while", "style", "stone", "phone", "clone", "throne", "alone", "house", "mouse",
    "castle", "battle", "rattle", "cattle", "basket", "market", "carpet", "target", "garden", "pardon",
    "friend", "attend", "defend", "offend", "bridge", "fridge", "orange", "change", "danger", "ranger",
    "simple", "dimple", "pimple", "temple", "purple", "circle", "muscle", "double", "bubble", "rubble",
    "summer", "hammer", "stammer", "winter", "filter", "silver", "finger", "ginger", "singer", "bringer",
    "turtle", "hurtle", "myrtle", "gentle", "mental", "dental", "rental", "portal", "mortal", "normal",
    "forest", "honest", "modest", "pocket", "rocket", "socket", "bucket", "ticket", "wicket", "cricket",
    "dragon", "wagon", "reason", "season", "person", "prison", "vision", "fusion", "flower", "shower",
    "butter", "letter", "better", "matter", "pattern", "lantern", "modern", "golden", "wooden", "broken",
    "master", "faster", "easter", "plaster", "planet", "magnet", "rabbit", "combat", "format", "animal",
    "manual", "casual", "visual", "settle", "bottle", "little", "kitchen", "chicken", "thicken", "quicken",
    "blanket", "bracket", "trinket", "program", "diagram", "weather", "feather", "leather", "brother", "another",
    "teacher", "preacher", "bleacher", "picture", "mixture", "culture", "nature", "capture", "feature", "texture",
    "lecture", "gesture", "venture", "pasture", "monster", "hamster", "blaster", "disaster", "chapter", "captain",
    "certain", "curtain", "mountain", "freedom", "kingdom", "boredom", "wisdom", "stardom", "perfect", "respect",
    "inspect", "suspect", "project", "subject", "object", "reject", "protect", "collect", "correct", "connect",
    "reflect", "example", "trample", "general", "mineral", "funeral", "central", "neutral", "natural", "textural",
    "musical", "magical", "typical", "history", "mystery", "battery", "pottery", "lottery", "factory", "victory",
    "century", "country", "library", "problem", "system", "custom", "random", "seldom", "tandem", "science",
    "silence", "balance", "advance", "romance", "finance", "absence", "essence", "defense", "offense", "computer",
    "together", "remember", "november", "december", "reporter", "supporter", "daughter", "laughter", "slaughter", "complete",
    "concrete", "discrete", "obsolete", "treasure", "pleasure", "measure", "pressure", "creature", "fracture", "standard",
    "backward", "forward", "awkward", "inward", "outward", "upward", "downward", "wayward", "steward", "elephant",
    "pleasant", "constant", "distant", "instant", "pregnant", "relevant", "abundant", "ignorant", "important", "birthday",
    "thursday", "saturday", "yesterday", "everyday", "someday", "holiday", "workday", "weekday", "payday", "creation",
    "relation", "vacation", "location", "nation", "station", "ration", "action", "fraction", "traction", "surprise",
    "comprise", "exercise", "paradise", "disguise", "improvise", "memorize", "organize", "finalize", "realize", "strength",
    "breadth", "warmth", "growth", "stealth", "wealth", "health", "beneath", "research", "approach", "building",
    "learning", "teaching", "reaching", "catching", "matching", "watching", "pitching", "stitching", "switching", "fountain",
    "chieftain", "maintain", "contain", "sustain", "obtain", "beautiful", "wonderful", "powerful", "colorful", "delightful",
    "plentiful", "bountiful", "respectful", "forgetful", "masterful", "adventure", "furniture", "signature", "departure", "miniature",
    "temperature", "structure", "sculpture", "literature", "moisture", "celebrate", "eliminate", "fascinate", "generate", "hibernate",
    "illustrate", "navigate", "penetrate", "cultivate", "fortunate", "community", "chemistry", "discovery", "machinery", "stationery",
    "monastery", "necessary", "secretary", "voluntary", "imaginary", "dimension", "extension", "attention", "invention", "retention",
    "suspension", "expansion", "mansion", "pension", "tension", "beginning", "lightning", "frightening", "happening", "listening",
    "reasoning", "seasoning", "weakening", "thickening", "reckoning", "chocolate", "immediate", "accurate", "desperate", "elaborate",
    "alternate", "moderate", "corporate", "separate", "knowledge", "challenge", "advantage", "encourage", "privilege", "cartridge",
    "partridge", "message", "package", "language", "everybody", "somebody", "anybody", "butterfly", "dragonfly", "jellyfish",
    "swordfish", "starfish", "goldfish", "happiness", "sadness", "kindness", "goodness", "darkness", "weakness", "sickness",
    "thickness", "quickness", "awareness",
)

WORD_SET = frozenset(WORD_LIST)

# Fallback answers revealed when nobody solves a round.
EXAMPLE_WORDS: tuple[str, ...] = (
    "cat", "dog", "bat", "hat", "rat", "sun", "fun", "run", "pen", "car",
    "book", "cook", "look", "love", "move", "time", "game", "name", "hope", "fire",
    "happy", "table", "light", "night", "green", "beach", "brave", "party", "dream",
    "castle", "friend", "simple", "summer", "forest", "dragon", "master", "planet",
    "kitchen", "weather", "culture", "freedom", "perfect", "science", "history",
    "computer", "together", "birthday", "elephant", "surprise", "building", "mountain",
    "beautiful", "wonderful", "adventure", "knowledge", "celebrate", "community",
)


def words_matching(first_letter: str, last_letter: str, words=EXAMPLE_WORDS) -> list[str]:
    first = (first_letter or "").lower()
    last = (last_letter or "").lower()
    if not first or not last:
        return []
    return [w for w in words if w[0] == first and w[-1] == last]
