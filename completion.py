COMMANDS = ["create-assignment", "list-assignments", "get-assignment",
            "update", "autocomplete", "help"]

COMPLETION_SCRIPT = """\
# bash completion for ch
_ch() {
    local cur cmd
    cur="${COMP_WORDS[COMP_CWORD]}"
    cmd="${COMP_WORDS[1]}"

    if [ "$COMP_CWORD" -eq 1 ]; then
        COMPREPLY=( $(compgen -W "%(commands)s" -- "$cur") )
        return 0
    fi

    case "$cmd" in
        create-assignment)
            # classroom, assignment, roster file, template
            if [ "$COMP_CWORD" -eq 4 ]; then
                COMPREPLY=( $(compgen -f -- "$cur") )
            fi
            ;;
        get-assignment)
            # classroom, prefix, directory
            if [ "$COMP_CWORD" -eq 4 ]; then
                COMPREPLY=( $(compgen -d -- "$cur") )
            fi
            ;;
    esac
    return 0
}
complete -F _ch ch
""" % {"commands": " ".join(COMMANDS)}


def main(argv=None) -> int:
    print(COMPLETION_SCRIPT, end="")
    return 0
