# Short words (2-6 letters) used to build display names

WORDS = (
    "amber", "apple", "arrow", "aspen", "atlas", "azure",
    "badge", "baker", "basil", "beach", "berry", "birch", "blaze", "bloom", "bold", "brave", "brick", "brook",
    "cabin", "candle", "cedar", "cider", "clay", "cloud", "clover", "comet", "coral", "crane", "crisp", "cub",
    "dawn", "delta", "dew", "drift", "dune", "dusk",
    "eagle", "ember", "echo", "elm",
    "fable", "fern", "field", "finch", "fjord", "flame", "flint", "fox", "frost",
    "gale", "gem", "ginger", "glade", "glow", "grove", "gust",
    "harbor", "hazel", "heron", "hill", "honey",
    "iris", "ivory", "ivy",
    "jade", "jay", "jolly", "juniper",
    "kelp", "kind", "kite", "koala",
    "lake", "lark", "lemon", "lilac", "lime", "lotus", "lucky", "lunar", "lynx",
    "maple", "marsh", "meadow", "mint", "misty", "moss", "moth",
    "nectar", "noble", "north", "nova",
    "oak", "ocean", "olive", "onyx", "orbit", "otter", "owl",
    "pearl", "pebble", "pine", "plum", "pond", "poppy",
    "quail", "quartz", "quick", "quiet",
    "rain", "raven", "reed", "ridge", "river", "robin", "ruby",
    "sage", "sandy", "shore", "silk", "sky", "slate", "snow", "solar", "spark", "stone", "storm", "swift",
    "thorn", "tide", "tiger", "topaz", "trail", "tulip",
    "umber", "upper",
    "vale", "velvet", "violet", "vivid",
    "wave", "willow", "wind", "wise", "wren",
    "yarrow", "yew",
    "zen", "zephyr", "zinc",
)
