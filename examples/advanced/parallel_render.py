"""One configured instance, many threads."""

from concurrent.futures import ThreadPoolExecutor

from mathspan import Markdown

md = Markdown(enable_bare_blocks=True)

documents = [f"Document {i}: $x_{{{i}}} = {i}^2$" for i in range(100)]

with ThreadPoolExecutor(max_workers=4) as executor:
    results = list(executor.map(md, documents))

print(f"Rendered {len(results)} documents")
print(results[7])
