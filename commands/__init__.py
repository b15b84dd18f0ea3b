from commands import clear, init, list_apps, select_build, show, submit, version

COMMANDS = {
    "init": init,
    "list-apps": list_apps,
    "version": version,
    "show": show,
    "select-build": select_build,
    "submit": submit,
    "clear": clear,
}
