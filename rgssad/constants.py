# Signature and revisions
RGSSAD_MAGIC = "RGSSAD"      # stored as 7 bytes: "RGSSAD\0"
MAGIC_FIELD_LEN = 7
TOC_START = 8                # signature + 1 revision byte

REVISION_V1 = 1              # RPG Maker XP and VX
REVISION_V3 = 3              # RPG Maker VX Ace
REVISION_UNKNOWN = -1
SUPPORTED_REVISIONS = (REVISION_V1, REVISION_V3)


# Engine versions, classified by file extension
ENGINE_XP = "xp"
ENGINE_VX = "vx"
ENGINE_VXACE = "vxace"
ENGINE_UNKNOWN = "unknown"

ENGINE_EXTENSIONS = {
    ".rgssad": ENGINE_XP,
    ".rgss2a": ENGINE_VX,
    ".rgss3a": ENGINE_VXACE,
}

ENGINE_REVISIONS = {
    ENGINE_XP: REVISION_V1,
    ENGINE_VX: REVISION_V1,
    ENGINE_VXACE: REVISION_V3,
}

ENGINE_NAMES = {
    ENGINE_XP: "RPG Maker XP",
    ENGINE_VX: "RPG Maker VX",
    ENGINE_VXACE: "RPG Maker VX Ace",
    ENGINE_UNKNOWN: "unknown",
}


# Keys
KEY_MASK = 0xFFFFFFFF
V1_INITIAL_KEY = 0xDEADCAFE
KEY_MULTIPLIER = 7
KEY_INCREMENT = 3
V3_SEED_MULTIPLIER = 9
V3_SEED_INCREMENT = 3


# Archive separator for entry names
ARCHIVE_SEP = "\\"

EXTRACT_CHUNK_SIZE = 1_048_576  # 1 MiB
