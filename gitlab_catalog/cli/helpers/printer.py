from json import dumps as to_json_string
from typing import Any, Callable, Iterable, Optional

import click
from pydantic import BaseModel
from yaml import dump as to_yaml_string, SafeDumper


class OutputFormat:
    JSON = 'json'
    YAML = 'yaml'

    ALL = [JSON, YAML]
    DEFAULT_FOR_DATA = JSON


def normalize(content: Any) -> Any:
    """ Convert the content to the structure which the JSON and YAML encoders can handle """
    if isinstance(content, BaseModel):
        return content.model_dump(mode='json', exclude_none=True)
    elif isinstance(content, dict):
        return {k: normalize(v) for k, v in content.items()}
    elif isinstance(content, (list, tuple)):
        return [normalize(v) for v in content]
    else:
        return content


def show_iterator(output_format: str,
                  iterator: Iterable[Any],
                  transform: Optional[Callable[[Any], Any]] = None,
                  limit: Optional[int] = None) -> int:
    """ Display the items as soon as the iterator provides them

        :return: the number of displayed items
    """
    if output_format == OutputFormat.JSON:
        printer = JsonIteratorPrinter()
    elif output_format == OutputFormat.YAML:
        printer = YamlIteratorPrinter()
    else:
        raise ValueError(f'The given output format ({output_format}) is not available.')

    return printer.print(iterator, transform=transform, limit=limit)


class BaseIteratorPrinter:
    def print(self,
              iterator: Iterable[Any],
              transform: Optional[Callable[[Any], Any]] = None,
              limit: Optional[int] = None) -> int:
        raise NotImplementedError()


class JsonIteratorPrinter(BaseIteratorPrinter):
    def print(self,
              iterator: Iterable[Any],
              transform: Optional[Callable[[Any], Any]] = None,
              limit: Optional[int] = None) -> int:
        row_count = 0

        # The array is closed even if the iterator fails so that the items received so far remain valid JSON.
        try:
            for row in iterator:
                click.echo('[' if row_count == 0 else ',')

                encoded = to_json_string(normalize(transform(row) if transform else row), indent=2)
                click.echo('\n'.join([f'  {line}' for line in encoded.split('\n')]), nl=False)

                row_count += 1

                # Stop before the next item is requested so that no extra page is fetched.
                if limit and row_count >= limit:
                    break
        finally:
            click.echo('[]' if row_count == 0 else '\n]')

        return row_count


class YamlIteratorPrinter(BaseIteratorPrinter):
    def print(self,
              iterator: Iterable[Any],
              transform: Optional[Callable[[Any], Any]] = None,
              limit: Optional[int] = None) -> int:
        row_count = 0

        for row in iterator:
            encoded = to_yaml_string(normalize(transform(row) if transform else row),
                                     Dumper=SafeDumper,
                                     sort_keys=False)
            click.echo('- ' + '\n'.join([f'  {line}' for line in encoded.split('\n')]).strip())

            row_count += 1

            if limit and row_count >= limit:
                break

        if row_count == 0:
            click.echo('[]')

        return row_count
