"""Built-in exclude patterns for version control metadata, OS litter and editor backups."""

DEFAULT_EXCLUDES = (
    # Miscellaneous typical temporary files
    "**/*~",
    "**/#*#",
    "**/.#*",
    "**/%*%",
    "**/._*",
    # CVS
    "**/CVS",
    "**/CVS/**",
    "**/.cvsignore",
    # Subversion
    "**/.svn",
    "**/.svn/**",
    # Arch
    "**/.arch-ids",
    "**/.arch-ids/**",
    # Bazaar
    "**/.bzr",
    "**/.bzr/**",
    # SurroundSCM
    "**/.MySCMServerInfo",
    # Mac
    "**/.DS_Store",
    # Serena Dimensions Version 10
    "**/.metadata",
    "**/.metadata/**",
    # Mercurial
    "**/.hg",
    "**/.hg/**",
    # Git
    "**/.git",
    "**/.git/**",
    # BitKeeper
    "**/BitKeeper",
    "**/BitKeeper/**",
    "**/ChangeSet",
    "**/ChangeSet/**",
    # darcs
    "**/_darcs",
    "**/_darcs/**",
    "**/.darcsrepo",
    "**/.darcsrepo/**",
    "**/-darcs-backup*",
    "**/.darcs-temp-mail",
)
