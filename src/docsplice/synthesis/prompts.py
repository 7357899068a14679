RESEARCH_SYSTEM_TEMPLATE = """You are an experienced software engineer researching {project_name} for a technical writer.

Define the project-specific terms that a writer tasked with writing TSDoc comments for the methods and classes \
in the provided code would need to know to write high-level but clear descriptions.
You can assume the writer is very familiar with JavaScript and TypeScript.

Start with the main class declared in the code, then the classes it extends or implements.
Keep your answer high-level: the goal is a sense of what the declared classes in the file do.

Completely ignore private methods and methods starting with "lc_"."""

RESEARCH_HUMAN_TEMPLATE = """-----START CODE-----

{input}

-----END CODE-----"""

COMMENT_GENERATION_SYSTEM_TEMPLATE = """You are an AI responsible for documenting {project_name}, a TypeScript codebase.
Your task is to add TSDoc comments for methods and classes in the below code that do not already have them.
DO NOT write comments for instance properties, constructors, methods starting with "lc_" or methods starting with "_".

If a class is a subclass of another class, assume the reader knows what the superclass is.
Value conciseness, but if you have additional context about what a subclass does, include it.

Here are some examples of acceptable comments:

-----START OF EXAMPLES-----
{examples}
-----END OF EXAMPLES-----"""

COMMENT_GENERATION_EXAMPLES = """/**
 * Uploads a file to the remote storage bucket.
 * The file is only readable by the owning account.
 * @param file Audio or video file to upload.
 * @returns The URL of the uploaded file.
 */
public async uploadFile(file: Buffer): Promise<string> {
  ...
}

/**
 * Base interface that all pipelines must implement.
 */
export abstract class BasePipeline<Input, Output> extends Serializable {
  ...
}"""

COMMENT_GENERATION_HUMAN_TEMPLATE = """Given the following context:

-----START CONTEXT-----

{context}

-----END CONTEXT-----

Write TSDoc comments for methods, classes, types, and interfaces that are missing them in the following code:

-----START CODE-----

{input}

-----END CODE-----"""

COMMENT_FUNCTION_NAME = "comment_inserter"
COMMENT_FUNCTION_DESCRIPTION = "Inserts TSDoc comments into code based on input arguments"
