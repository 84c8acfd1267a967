from gitlab_catalog.common.environments import flag

in_global_debug_mode = flag('GITLAB_CATALOG_DEBUG',
                            description='Enable the debug mode')
detailed_error = flag('GITLAB_CATALOG_DETAILED_ERROR', description='Provide more details on error')
