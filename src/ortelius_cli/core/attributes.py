"""Recognised attribute names.

These are the environment-variable style names understood by the collector.
They are matched after upper-casing, whether they come from derived VCS
facts, the process environment or ``component.toml``. Several names are
historical aliases of the same attribute (see ``resolve.engine``).
"""

BASENAME = "BASENAME"
BUILD_DATE = "BLDDATE"
BUILD_DATE_LONG = "BUILDDATE"
BUILD_ID = "BUILDID"
BUILD_NUM = "BUILDNUM"
BUILD_URL = "BUILDURL"
CHART = "CHART"
CHART_NAMESPACE = "CHARTNAMESPACE"
CHART_REPO = "CHARTREPO"
CHART_REPO_URL = "CHARTREPOURL"
CHART_VERSION = "CHARTVERSION"
DISCORD_CHANNEL = "DISCORDCHANNEL"
DOCKER_REPO = "DOCKERREPO"
DOCKER_SHA = "DOCKERSHA"
DOCKER_TAG = "DOCKERTAG"
GIT_COMMIT_LEGACY = "GITCOMMIT"
GIT_REPO_LEGACY = "GITREPO"
GIT_TAG_LEGACY = "GITTAG"
GIT_URL_LEGACY = "GITURL"
GIT_BRANCH = "GIT_BRANCH"
GIT_BRANCH_CREATE_COMMIT = "GIT_BRANCH_CREATE_COMMIT"
GIT_BRANCH_CREATE_TIMESTAMP = "GIT_BRANCH_CREATE_TIMESTAMP"
GIT_BRANCH_PARENT = "GIT_BRANCH_PARENT"
GIT_COMMIT = "GIT_COMMIT"
GIT_COMMITTERS_CNT = "GIT_COMMITTERS_CNT"
GIT_COMMIT_AUTHORS = "GIT_COMMIT_AUTHORS"
GIT_COMMIT_TIMESTAMP = "GIT_COMMIT_TIMESTAMP"
GIT_CONTRIB_PERCENTAGE = "GIT_CONTRIB_PERCENTAGE"
GIT_LINES_ADDED = "GIT_LINES_ADDED"
GIT_LINES_DELETED = "GIT_LINES_DELETED"
GIT_LINES_TOTAL = "GIT_LINES_TOTAL"
GIT_ORG = "GIT_ORG"
GIT_PREVIOUS_COMPONENT_COMMIT = "GIT_PREVIOUS_COMPONENT_COMMIT"
GIT_REPO = "GIT_REPO"
GIT_REPO_PROJECT = "GIT_REPO_PROJECT"
GIT_SIGNED_OFF_BY = "GIT_SIGNED_OFF_BY"
GIT_TAG = "GIT_TAG"
GIT_TOTAL_COMMITTERS_CNT = "GIT_TOTAL_COMMITTERS_CNT"
GIT_URL = "GIT_URL"
GIT_VERIFY_COMMIT = "GIT_VERIFY_COMMIT"
HIPCHAT_CHANNEL = "HIPCHATCHANNEL"
PAGERDUTY_BUSINESS_URL = "PAGERDUTYBUSINESSURL"
PAGERDUTY_URL = "PAGERDUTYURL"
REPOSITORY = "REPOSITORY"
SERVICE_OWNER = "SERVICEOWNER"
SHORT_SHA = "SHORT_SHA"
SLACK_CHANNEL = "SLACKCHANNEL"

# Derived by the collector but not an attribute of the record
COMPNAME = "COMPNAME"

# Extra attributes that name the component version
NAME = "NAME"
VARIANT = "VARIANT"
VERSION = "VERSION"
